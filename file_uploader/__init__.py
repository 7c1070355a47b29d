"""File uploader: validate, name and store incoming files in local or S3 storage."""

__version__ = "1.0.0"
