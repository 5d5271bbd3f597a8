"""Advisory style and hygiene checks for files in a git working tree."""

__version__ = "0.1.0"
