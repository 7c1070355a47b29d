"""Tests for NameGenerator (transliteration and key layout)."""

import re

import pytest

from file_uploader.application.services.name_generator import NameGenerator
from file_uploader.shared.utils.generators import SequenceTokenSource

SLUG_CHARSET = re.compile(r"^[a-z0-9.-]*$")


class TestTransliterate:
    """Slug pipeline: trim, table + ASCII lower-case, separators, collapse."""

    def test_cyrillic_with_extension(self) -> None:
        assert NameGenerator.transliterate("Отчёт 2024.png") == "otchet-2024.png"

    def test_shch_lower_and_upper_differ(self) -> None:
        assert NameGenerator.transliterate("щука") == "schuka"
        assert NameGenerator.transliterate("Щука") == "szuka"

    def test_hard_and_soft_signs_dropped(self) -> None:
        assert NameGenerator.transliterate("Объём") == "obem"
        assert NameGenerator.transliterate("соль") == "sol"

    def test_dash_and_slash_become_separators(self) -> None:
        assert NameGenerator.transliterate("a/b-c") == "a-b-c"
        assert NameGenerator.transliterate("reports/2024/q1") == "reports-2024-q1"

    def test_whitespace_trimmed_and_collapsed(self) -> None:
        assert NameGenerator.transliterate("  Hello   World  ") == "hello-world"
        assert NameGenerator.transliterate("tab\tand\nnewline") == "tab-and-newline"

    def test_unsupported_runs_collapse_to_one_separator(self) -> None:
        assert NameGenerator.transliterate("файл (1).PDF") == "fayl-1-.pdf"
        assert NameGenerator.transliterate("a!!!b") == "a-b"

    def test_dots_are_kept(self) -> None:
        assert NameGenerator.transliterate("archive.tar.gz") == "archive.tar.gz"

    def test_all_unsupported_yields_empty_slug(self) -> None:
        assert NameGenerator.transliterate("!!!") == ""
        assert NameGenerator.transliterate("文件") == ""

    def test_only_ascii_is_lower_cased(self) -> None:
        # KELVIN SIGN would lower-case to a Latin k under str.lower().
        assert NameGenerator.transliterate("K") == ""

    @pytest.mark.parametrize(
        "value",
        ["Отчёт 2024.png", "  Hello   World  ", "a/b-c", "файл (1).PDF", "--x--", "Ünïcödé 文件.txt"],
    )
    def test_idempotent(self, value: str) -> None:
        once = NameGenerator.transliterate(value)
        assert NameGenerator.transliterate(once) == once

    @pytest.mark.parametrize(
        "value",
        ["Ünïcödé 文件.txt", "../../etc/passwd", "a\\b\\c.doc", "ЁЛКА_new year!.JPG", "   "],
    )
    def test_slug_charset(self, value: str) -> None:
        assert SLUG_CHARSET.match(NameGenerator.transliterate(value))


class TestGenerate:
    """Keys are '{token}-{slug}' with a fresh token per call."""

    def test_default_token_is_hex(self) -> None:
        key = NameGenerator().generate("Отчёт 2024.png")
        assert re.match(r"^[a-f0-9]+-otchet-2024\.png$", key)

    def test_injected_token_source(self) -> None:
        generator = NameGenerator(SequenceTokenSource())
        assert generator.generate("My File.txt") == "00000001-my-file.txt"
        assert generator.generate("My File.txt") == "00000002-my-file.txt"

    def test_unsupported_name_keeps_token_and_dash(self) -> None:
        generator = NameGenerator(SequenceTokenSource())
        assert generator.generate("!!!") == "00000001-"

    def test_no_path_separators_or_whitespace(self) -> None:
        key = NameGenerator().generate("../secret dir/file name.txt")
        assert "/" not in key
        assert not re.search(r"\s", key)

    def test_same_name_gives_distinct_keys(self) -> None:
        generator = NameGenerator()
        keys = {generator.generate("same.png") for _ in range(1000)}
        assert len(keys) == 1000
