"""Select a region of a screenshot and copy it to the clipboard or save it to a file."""

__version__ = "0.2.0"