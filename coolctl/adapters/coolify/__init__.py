"""Coolify API binding — HTTP client and response decoding."""

from coolctl.adapters.coolify.client import CoolifyAuthError, CoolifyClient, CoolifyError
from coolctl.adapters.coolify.decode import decode_list, decode_logs

__all__ = [
    "CoolifyAuthError",
    "CoolifyClient",
    "CoolifyError",
    "decode_list",
    "decode_logs",
]
