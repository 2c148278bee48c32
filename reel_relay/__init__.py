"""Resolve social-media post references and relay the video bytes."""

__version__ = "0.1.0"
