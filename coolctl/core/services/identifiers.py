"""
Identifier normalization — one canonical string key per remote id.

The Coolify API is inconsistent about identifier shapes: some records
carry a numeric ``id``, some only a ``uuid``, and references to other
records (``environment_id``, ``project_uuid`` …) arrive as ints or
strings depending on the endpoint.  Every lookup in the core goes
through :func:`to_id` so that ``10``, ``"10"`` and ``" 10 "`` all land
on the same key.
"""

from __future__ import annotations

from typing import Any


def to_id(value: Any) -> str | None:
    """Normalize an identifier to a non-empty trimmed string.

    Returns None for None, and for values that are blank once trimmed.
    Idempotent: ``to_id(to_id(v)) == to_id(v)``.
    """
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        # JSON numbers may round-trip as floats; the API's ids are ints
        value = int(value)
    text = str(value).strip()
    return text or None


def to_key(value: Any) -> str:
    """Like :func:`to_id`, but returns ``""`` instead of None.

    Used for references carried on list items, where callers only ever
    test membership and an empty string never matches an index key.
    """
    return to_id(value) or ""


def first_present(*values: Any) -> Any:
    """Return the first value that is not None (or None).

    An empty string counts as present, so ``first_present("", "x")``
    returns ``""``.  Callers normalize the result afterwards.
    """
    for value in values:
        if value is not None:
            return value
    return None


def canonical_id(record: dict, *fields: str) -> str | None:
    """Canonical id of *record* over an ordered list of candidate fields."""
    return to_id(first_present(*(record.get(f) for f in fields)))
