"""Campaign Portal: backend API for a constituency campaign website."""

__version__ = "0.1.0"
