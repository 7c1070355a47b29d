"""Content-type helpers."""

import mimetypes

import magic

DEFAULT_CONTENT_TYPE = "application/octet-stream"

# libmagic reads at most this much of a file for its tests.
SNIFF_BYTES = 2048

# What libmagic reports when there is no content to classify.
_NO_CONTENT_TYPES = frozenset({"", "application/x-empty", "inode/x-empty"})


def guess_content_type(filename: str) -> str:
    """Guess a MIME type from the file name; falls back to application/octet-stream."""
    ctype, _ = mimetypes.guess_type(filename)
    return ctype or DEFAULT_CONTENT_TYPE


def sniff_content_type(data: bytes, filename: str) -> str:
    """Detect the MIME type from the bytes themselves (libmagic).

    The file name only decides the type when the content gives libmagic
    nothing to work with (an empty file).
    """
    sniffed = magic.from_buffer(data[:SNIFF_BYTES], mime=True) or ""
    if sniffed in _NO_CONTENT_TYPES:
        return guess_content_type(filename)
    return sniffed
