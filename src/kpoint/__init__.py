"""K-Point recognition points service."""

__version__ = "0.1.0"
