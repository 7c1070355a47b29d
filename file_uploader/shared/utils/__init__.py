"""Shared utilities: token generators and content-type helpers."""

from file_uploader.shared.utils.content_types import (
    DEFAULT_CONTENT_TYPE,
    guess_content_type,
    sniff_content_type,
)
from file_uploader.shared.utils.generators import (
    CuidTokenSource,
    SequenceTokenSource,
    TokenSource,
    UniqidTokenSource,
    create_token_source,
    generate_cuid,
)

__all__ = [
    "DEFAULT_CONTENT_TYPE",
    "guess_content_type",
    "sniff_content_type",
    "generate_cuid",
    "TokenSource",
    "UniqidTokenSource",
    "CuidTokenSource",
    "SequenceTokenSource",
    "create_token_source",
]
