"""altfeed - xkcd feed with the alt text where you can read it."""

__version__ = "0.1.0"
