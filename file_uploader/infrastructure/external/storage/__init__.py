"""Storage: local filesystem and S3-compatible backends.

StorageFactory builds one backend per configured uploader. Implementations
are imported lazily inside StorageFactory.create_backend() so that boto3 is
only loaded when an S3 uploader is configured.

Implementations satisfy IStorageBackend (write, read, exists, delete,
list_keys, list_stored_keys).
"""

from file_uploader.infrastructure.external.storage.factory import StorageFactory

__all__ = ["StorageFactory"]
