"""coolctl — browse and operate a Coolify instance from the terminal."""

__version__ = "0.1.0"
