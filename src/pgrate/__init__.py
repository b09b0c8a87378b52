"""Task runner that applies numbered SQL migrations with psql and builds CUE config profiles."""

__version__ = "0.1.0"
