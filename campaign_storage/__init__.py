"""Campaign asset storage on top of S3."""

__version__ = "1.0.0"
