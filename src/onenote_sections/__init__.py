"""List the sections of a OneNote notebook on behalf of the calling user."""

__version__ = "0.1.0"
