# =============================================================================
# Corpus Loader Tests
# =============================================================================

import pytest

from conftest import HEADER, separable_samples, write_dataset
from spamdetector.errors import CorpusFormatError, CorpusReadError, DatasetNotFoundError
from spamdetector.schemas import EmailSample
from spamdetector.training.dataset import load_corpus, parse_bool, read_samples, to_dataframe


class TestReadSamples:
    def test_skips_header(self, temp_dir):
        path = temp_dir / "data.tsv"
        path.write_text(f"{HEADER}\na@x.com\tHi\tHello\tFalse\n", encoding="utf-8")

        rows = read_samples(path, has_header=True)

        assert rows == [EmailSample("a@x.com", "Hi", "Hello", False)]

    def test_without_header_keeps_first_line(self, temp_dir):
        path = temp_dir / "feedback.tsv"
        path.write_text("a@x.com\tHi\tHello\tTrue\n", encoding="utf-8")

        rows = read_samples(path, has_header=False)

        assert rows == [EmailSample("a@x.com", "Hi", "Hello", True)]

    def test_empty_fields_allowed(self, temp_dir):
        path = temp_dir / "feedback.tsv"
        path.write_text("\t\t\tFalse\n", encoding="utf-8")

        assert read_samples(path, has_header=False) == [EmailSample("", "", "", False)]

    def test_blank_lines_ignored(self, temp_dir):
        path = temp_dir / "feedback.tsv"
        path.write_text("a\tb\tc\tTrue\n\n\nd\te\tf\tFalse\n", encoding="utf-8")

        assert len(read_samples(path, has_header=False)) == 2

    def test_wrong_field_count(self, temp_dir):
        path = temp_dir / "data.tsv"
        path.write_text(f"{HEADER}\na\tb\tc\tTrue\nonly\tthree\tFalse\n", encoding="utf-8")

        with pytest.raises(CorpusFormatError) as excinfo:
            read_samples(path, has_header=True)

        assert excinfo.value.line_no == 3
        assert excinfo.value.path == path

    def test_unparseable_label(self, temp_dir):
        path = temp_dir / "feedback.tsv"
        path.write_text("a\tb\tc\tmaybe\n", encoding="utf-8")

        with pytest.raises(CorpusFormatError, match="maybe"):
            read_samples(path, has_header=False)

    def test_invalid_utf8_is_a_format_error(self, temp_dir):
        path = temp_dir / "feedback.tsv"
        path.write_bytes(b"a\tb\tc\tTrue\na@x.com\t\xff\xfe\tbody\tTrue\n")

        with pytest.raises(CorpusFormatError) as excinfo:
            read_samples(path, has_header=False)

        assert excinfo.value.line_no == 2

    def test_unreadable_file(self, temp_dir):
        path = temp_dir / "feedback.tsv"
        path.mkdir()

        with pytest.raises(CorpusReadError):
            read_samples(path, has_header=False)

    def test_byte_order_mark_on_header(self, temp_dir):
        path = temp_dir / "data.tsv"
        path.write_bytes(("\ufeff" + HEADER + "\na\tb\tc\tFalse\n").encode("utf-8"))

        assert read_samples(path, has_header=True) == [EmailSample("a", "b", "c", False)]

    def test_windows_line_endings(self, temp_dir):
        path = temp_dir / "feedback.tsv"
        path.write_bytes(b"a\tb\tc\tTrue\r\nd\te\tf\tFalse\r\n")

        rows = read_samples(path, has_header=False)

        assert [row.is_spam for row in rows] == [True, False]


@pytest.mark.parametrize(
    "raw, expected",
    [("True", True), ("false", False), ("TRUE", True), ("1", True), ("0", False), (" False ", False), ("yes", None)],
)
def test_parse_bool(raw, expected):
    assert parse_bool(raw) is expected


class TestLoadCorpus:
    def test_base_only(self, settings, base_dataset, console):
        corpus = load_corpus(settings, console)

        assert corpus == separable_samples()

    def test_base_then_feedback_in_order(self, settings, base_dataset):
        feedback = [
            EmailSample("d@x.com", "Meeting", "Lunch?", False),
            EmailSample("e@x.com", "FREE", "FREE FREE", True),
        ]
        write_dataset(settings.feedback_path, feedback, header=False)

        corpus = load_corpus(settings)

        assert len(corpus) == len(separable_samples()) + 2
        assert corpus[-2:] == feedback

    def test_duplicates_are_kept(self, settings, base_dataset):
        row = EmailSample("d@x.com", "Meeting", "Lunch?", False)
        write_dataset(settings.feedback_path, [row, row], header=False)

        corpus = load_corpus(settings)

        assert corpus[-2:] == [row, row]

    def test_missing_base_dataset(self, settings):
        with pytest.raises(DatasetNotFoundError):
            load_corpus(settings)

    def test_malformed_feedback_is_fatal(self, settings, base_dataset):
        settings.feedback_path.write_text("broken line\n", encoding="utf-8")

        with pytest.raises(CorpusFormatError):
            load_corpus(settings)


def test_to_dataframe_columns():
    frame = to_dataframe([EmailSample("a", "b", "c", True), EmailSample("d", "e", "f", False)])

    assert list(frame.columns) == ["sender", "subject", "body", "is_spam"]
    assert frame["is_spam"].tolist() == [1, 0]


def test_to_dataframe_empty():
    frame = to_dataframe([])

    assert frame.empty
    assert list(frame.columns) == ["sender", "subject", "body", "is_spam"]
