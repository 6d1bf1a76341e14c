"""Tests for duration, quarter and delimited-text parsing."""

from __future__ import annotations

import pytest

from roadmap.parsing import duration_unit_hours, get_quarter, parse_csv, parse_duration, parse_month, split_line


class TestParseDuration:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("3 hours", 3),
            ("2 days", 16),
            ("1 week", 40),
            ("1 week 2 days 3 hours", 59),
            ("2 Weeks", 80),
            ("5days", 40),
        ],
    )
    def test_units_combine(self, text: str, expected: int) -> None:
        assert parse_duration(text) == expected

    def test_empty_is_zero(self) -> None:
        assert parse_duration("") == 0
        assert parse_duration(None) == 0

    @pytest.mark.parametrize("text", ["bogus", "0 days", "week", "0h"])
    def test_zero_total_falls_back(self, text: str) -> None:
        assert parse_duration(text) == 4

    def test_first_number_before_keyword(self) -> None:
        assert parse_duration("2 days or 3 days") == 16

    def test_unit_hours_has_no_fallback(self) -> None:
        assert duration_unit_hours("bogus") == 0
        assert duration_unit_hours("1 week 1 hour") == 41


class TestGetQuarter:
    @pytest.mark.parametrize(
        ("date_text", "expected"),
        [
            ("01/ene/2024", "Q1"),
            ("28/mar/2024", "Q1"),
            ("01/abr/2024", "Q2"),
            ("15/jun/2024", "Q2"),
            ("31/jul/2024", "Q3"),
            ("30/sep/2024", "Q3"),
            ("01/oct/2024", "Q4"),
            ("25/DIC/2024", "Q4"),
        ],
    )
    def test_month_boundaries(self, date_text: str, expected: str) -> None:
        assert get_quarter(date_text) == expected

    def test_missing_date_is_q4(self) -> None:
        assert get_quarter("") == "Q4"
        assert get_quarter(None) == "Q4"

    def test_no_second_token_defaults_to_october(self) -> None:
        assert parse_month("2024-01-15") == 9
        assert get_quarter("2024-01-15") == "Q4"

    def test_unknown_month_is_q4(self) -> None:
        assert parse_month("01/jan/2024") is None
        assert get_quarter("01/jan/2024") == "Q4"


class TestSplitLine:
    def test_quoted_comma_kept(self) -> None:
        assert split_line('x,"a,b",y') == ["x", "a,b", "y"]

    def test_fields_are_trimmed(self) -> None:
        assert split_line(" a , b ,c ") == ["a", "b", "c"]

    def test_trailing_empty_field(self) -> None:
        assert split_line("a,b,") == ["a", "b", ""]


class TestParseCsv:
    def test_quoted_field_with_comma(self) -> None:
        rows = parse_csv('name,team\n"a,b",Food\n')
        assert rows == [{"name": "a,b", "team": "Food"}]

    def test_headers_lowercased_and_trimmed(self) -> None:
        rows = parse_csv(" NAME , TEAM \nx,Food")
        assert list(rows[0]) == ["name", "team"]
        assert parse_csv("team\nFood")[0]["team"] == parse_csv("TEAM\nFood")[0]["team"]

    def test_blank_lines_skipped(self) -> None:
        rows = parse_csv("name\n\na\n   \nb\n")
        assert [r["name"] for r in rows] == ["a", "b"]

    def test_short_rows_fill_none(self) -> None:
        rows = parse_csv("name,team,status\nx")
        assert rows == [{"name": "x", "team": None, "status": None}]

    def test_crlf_line_endings(self) -> None:
        rows = parse_csv("name,team\r\nx,Food\r\n")
        assert rows == [{"name": "x", "team": "Food"}]

    def test_empty_text(self) -> None:
        assert parse_csv("") == []
        assert parse_csv("name,team") == []

    def test_doubled_quotes_are_not_an_escape(self) -> None:
        rows = parse_csv('name\n"say ""hi"""')
        assert rows[0]["name"] == "say hi"

    def test_sample_has_one_row_per_data_line(self, sample_csv: str) -> None:
        rows = parse_csv(sample_csv)
        assert len(rows) == 8
        assert rows[0]["name"] == "Checkout, nuevo flujo"
        assert rows[5]["duration"] == ""


def test_only_ascii_digits_count() -> None:
    # Arabic-Indic three is not an unsigned integer here.
    assert parse_duration("٣ days") == 4
    assert duration_unit_hours("٣ days") == 0
