"""Client for the Twitter v1.1 REST, streaming, search and media upload APIs."""

__version__ = "0.1.0"