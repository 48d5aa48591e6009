"""Website uptime monitor: HTTP checks, SQLite storage and an HTML status page."""

__version__ = "0.1.0"
__all__ = ["__version__"]