"""Career pathway recommendations for transitioning veterans."""

__version__ = "0.1.0"
