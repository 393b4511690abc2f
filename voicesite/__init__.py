"""Voice-driven website builder: compose, preview, version and generate."""

__version__ = "0.1.0"
