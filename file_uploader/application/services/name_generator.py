"""Storage key generation: Cyrillic-aware transliteration plus a uniqueness token."""

import re
import string
from typing import ClassVar

from file_uploader.shared.utils.generators import TokenSource, UniqidTokenSource

_CYRILLIC_LOWER = "абвгдеёжзийклмнопрстуфхцчшщъыьэюя"
_CYRILLIC_UPPER = "АБВГДЕЁЖЗИЙКЛМНОПРСТУФХЦЧШЩЪЫЬЭЮЯ"
_LATIN_LOWER = [
    "a", "b", "v", "g", "d", "e", "e", "zh", "z", "i", "y", "k", "l", "m",
    "n", "o", "p", "r", "s", "t", "u", "f", "h", "c", "ch", "sh", "sch", "",
    "y", "", "e", "yu", "ya",
]
# Same as lower case except Щ.
_LATIN_UPPER = [
    "a", "b", "v", "g", "d", "e", "e", "zh", "z", "i", "y", "k", "l", "m",
    "n", "o", "p", "r", "s", "t", "u", "f", "h", "c", "ch", "sh", "sz", "",
    "y", "", "e", "yu", "ya",
]


def _build_translation() -> dict[int, str]:
    table: dict[str, str] = {}
    table.update(zip(_CYRILLIC_LOWER, _LATIN_LOWER))
    table.update(zip(_CYRILLIC_UPPER, _LATIN_UPPER))
    table.update(zip(string.ascii_uppercase, string.ascii_lowercase))
    table["-"] = " "
    table["/"] = " "
    return str.maketrans(table)


class NameGenerator:
    """Map an arbitrary filename to ``{token}-{slug}``.

    The slug is lower-case ASCII drawn from ``[a-z0-9.-]``. Letters of the
    Russian alphabet are transliterated through a fixed table (ъ and ь are
    dropped); ASCII letters are lower-cased; every other run of characters
    becomes a single separator. Only ASCII is lower-cased so that
    characters such as the Kelvin sign never fold into Latin letters.
    """

    TRANSLATION: ClassVar[dict[int, str]] = _build_translation()
    UNSUPPORTED_RUN: ClassVar[re.Pattern[str]] = re.compile(r"[^a-z0-9\-.]+")
    WHITESPACE_RUN: ClassVar[re.Pattern[str]] = re.compile(r"\s+")

    def __init__(self, token_source: TokenSource | None = None) -> None:
        self.token_source = token_source or UniqidTokenSource()

    @classmethod
    def transliterate(cls, value: str) -> str:
        """Return the slug for value. Pure and idempotent."""
        slug = value.strip().translate(cls.TRANSLATION)
        slug = cls.UNSUPPORTED_RUN.sub(" ", slug)
        return cls.WHITESPACE_RUN.sub("-", slug.strip())

    def generate(self, original_name: str) -> str:
        """Return a fresh storage key for original_name. Never raises."""
        key = f"{self.token_source.next_token()}-{self.transliterate(original_name)}"
        return self.WHITESPACE_RUN.sub("-", key)
