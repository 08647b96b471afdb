"""
Tests for subject set resolution.
"""

import pytest

from hcpmirror.exceptions import ConfigurationError
from hcpmirror.subjects import read_subject_list, resolve_subjects


class TestResolveSubjects:

    def test_single_subject(self):
        assert resolve_subjects(subject="ABC123") == ["ABC123"]

    def test_subject_list_file(self, tmp_path):
        subjlist = tmp_path / "subjects.txt"
        subjlist.write_text("ABC123\nDEF456\n")
        assert resolve_subjects(subject_list=subjlist) == ["ABC123", "DEF456"]

    def test_both_is_error(self, tmp_path):
        subjlist = tmp_path / "subjects.txt"
        subjlist.write_text("ABC123\n")
        with pytest.raises(ConfigurationError, match="only one"):
            resolve_subjects(subject="ABC123", subject_list=subjlist)

    def test_neither_is_error(self):
        with pytest.raises(ConfigurationError, match="required"):
            resolve_subjects()

    @pytest.mark.parametrize("subject", ["", "  "])
    def test_empty_subject_is_error(self, subject):
        with pytest.raises(ConfigurationError, match="--subject must not be empty"):
            resolve_subjects(subject=subject)

    def test_missing_file_is_error(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Cannot read subject list"):
            resolve_subjects(subject_list=tmp_path / "nope.txt")


class TestReadSubjectList:

    def test_any_whitespace_separates(self, tmp_path):
        subjlist = tmp_path / "subjects.txt"
        subjlist.write_text("100307 100408\n\t101107\n\n  102311  \n")
        assert read_subject_list(subjlist) == ["100307", "100408", "101107", "102311"]

    def test_order_and_duplicates_kept(self, tmp_path):
        subjlist = tmp_path / "subjects.txt"
        subjlist.write_text("B\nA\nB\n")
        assert read_subject_list(subjlist) == ["B", "A", "B"]

    def test_empty_file(self, tmp_path):
        subjlist = tmp_path / "subjects.txt"
        subjlist.write_text("\n")
        assert read_subject_list(subjlist) == []

    def test_directory_is_unreadable(self, tmp_path):
        with pytest.raises(ConfigurationError):
            read_subject_list(tmp_path)
