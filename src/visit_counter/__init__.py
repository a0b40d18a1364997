"""Daily and monthly website visit counter."""

__version__ = "0.1.0"
