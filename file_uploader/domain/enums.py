"""Domain enums."""

from enum import Enum


class BackendKind(str, Enum):
    """Storage backend variants; values match the configuration section names."""

    LOCAL = "local"
    AWS_S3 = "aws_s3"
