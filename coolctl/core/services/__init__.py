"""Core services — pure list logic plus the fetch cache."""
