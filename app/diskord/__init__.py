"""diskord - Storage manager with a reversible session trash."""

__version__ = "0.1.0"
