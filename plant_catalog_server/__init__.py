"""Plant catalog browser and shopping cart server."""

__version__ = "0.1.0"
