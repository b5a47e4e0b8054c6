"""Estate Chat: natural-language property search over a small fixed catalog."""

__version__ = "0.1.0"
