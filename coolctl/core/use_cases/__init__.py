"""Use cases — fetch, join and shape data for the views."""
