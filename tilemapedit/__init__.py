"""A modal, keyboard-driven terminal editor for rectangular tile maps."""

__version__ = "0.1.0"