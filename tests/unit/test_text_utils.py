"""Unit tests for the normaliser and the metadata extractor."""

from docqa.ingestion.metadata import extract_metadata
from docqa.ingestion.normalizer import clean_text


class TestCleanText:
    def test_collapses_whitespace_runs(self) -> None:
        assert clean_text("  Hello \n\n  world\t\tagain  ") == "Hello world again"

    def test_newlines_become_spaces(self) -> None:
        assert clean_text("line one\nline two") == "line one line two"

    def test_blank_lines_fold_to_single_space(self) -> None:
        cleaned = clean_text("para one\n\n\npara two\n \n\tpara three")
        assert cleaned == "para one para two para three"
        assert "\n" not in cleaned

    def test_empty_input(self) -> None:
        assert clean_text("") == ""

    def test_whitespace_only_input(self) -> None:
        assert clean_text("\n\n \t \n") == ""

    def test_already_clean_text_unchanged(self) -> None:
        text = "The cat sat. The dog ran."
        assert clean_text(text) == text


class TestExtractMetadata:
    def test_counts(self) -> None:
        text = "Hello world. How are you? Fine!\n\nSecond paragraph here."
        stats = extract_metadata(text)
        assert stats.word_count == 9
        assert stats.sentence_count == 4
        assert stats.paragraph_count == 2

    def test_repeated_terminators_count_once(self) -> None:
        stats = extract_metadata("Really?! Yes... Okay.")
        assert stats.sentence_count == 3

    def test_blank_paragraphs_ignored(self) -> None:
        stats = extract_metadata("One.\n\n   \n\nTwo.\n \nThree.")
        assert stats.paragraph_count == 3

    def test_empty_text(self) -> None:
        stats = extract_metadata("")
        assert stats.word_count == 0
        assert stats.sentence_count == 0
        assert stats.paragraph_count == 0
