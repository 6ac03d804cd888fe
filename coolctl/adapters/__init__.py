"""Adapters — bindings to things outside the process (API, clipboard)."""
