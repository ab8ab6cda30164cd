"""Symbol registries, component metadata, a minimal JSON codec and a demo walkthrough."""

__version__ = "0.1.0"
__all__ = ["jsonlite", "symbols", "metadata", "demo"]