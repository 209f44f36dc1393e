"""Weekly traffic crash report pipeline."""

__version__ = "0.1.0"
