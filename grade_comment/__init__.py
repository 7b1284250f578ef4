"""Post auto-grade results as a pull request comment."""

__version__ = "0.1.0"
