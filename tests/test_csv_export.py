"""Tests for CSV serialization and export."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from symbifi.services.csv_export import (
    escape_csv_value,
    export_rows,
    format_currency_for_csv,
    format_date_for_csv,
    rows_to_csv,
)


class TestEscapeCsvValue:
    """Test single cell rendering."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("plain", "plain"),
            ("x,y", '"x,y"'),
            ('He said "hi"', '"He said ""hi"""'),
            ("two\nlines", '"two\nlines"'),
            ("carriage\rreturn", "carriage\rreturn"),
            ("", ""),
            (None, ""),
            (42, "42"),
            (Decimal("1500.50"), "1500.50"),
            (True, "True"),
        ],
    )
    def test_escape(self, value, expected):
        assert escape_csv_value(value) == expected


class TestRowsToCsv:
    """Test whole-document serialization."""

    def test_quotes_and_commas(self):
        content = rows_to_csv([{"a": "x,y", "b": 'He said "hi"'}])

        assert content == 'a,b\n"x,y","He said ""hi"""'

    def test_no_trailing_newline(self):
        content = rows_to_csv([{"a": 1}, {"a": 2}])

        assert content == "a\n1\n2"

    def test_empty_rows(self):
        assert rows_to_csv([]) is None

    def test_headers_select_and_label_columns(self):
        rows = [{"name": "Ada", "amount": "100.00", "internal": "skip"}]

        content = rows_to_csv(rows, headers={"amount": "Amount (NGN)", "name": "Name"})

        assert content == "Amount (NGN),Name\n100.00,Ada"

    def test_header_labels_are_escaped(self):
        content = rows_to_csv([{"a": 1}], headers={"a": "Total, all"})

        assert content == '"Total, all"\n1'

    def test_missing_keys_become_empty(self):
        content = rows_to_csv([{"a": 1, "b": 2}, {"a": 3}])

        assert content == "a,b\n1,2\n3,"


class TestExportRows:
    """Test writing exports to disk."""

    def test_writes_file(self, tmp_path):
        path = export_rows([{"a": "x,y"}], "payroll_report", output_dir=tmp_path)

        assert path == tmp_path / "payroll_report.csv"
        assert path.read_text(encoding="utf-8") == 'a\n"x,y"'

    def test_empty_rows_write_nothing(self, tmp_path):
        target = tmp_path / "out"

        assert export_rows([], "payroll_report", output_dir=target) is None
        assert not target.exists()

    def test_no_byte_order_mark(self, tmp_path):
        path = export_rows([{"name": "Adé"}], "names", output_dir=tmp_path)

        assert path.read_bytes().startswith(b"name\n")


class TestFormatting:
    """Test date and currency formatting helpers."""

    def test_date(self):
        assert format_date_for_csv(date(2026, 10, 5)) == "2026-10-05"

    def test_naive_datetime(self):
        assert format_date_for_csv(datetime(2026, 10, 5, 23, 30)) == "2026-10-05"

    def test_aware_datetime_converted_to_utc(self):
        lagos = timezone(timedelta(hours=1))

        assert format_date_for_csv(datetime(2026, 10, 6, 0, 30, tzinfo=lagos)) == "2026-10-05"

    def test_iso_string(self):
        assert format_date_for_csv("2026-10-05T12:00:00Z") == "2026-10-05"
        assert format_date_for_csv("2026-10-05") == "2026-10-05"

    @pytest.mark.parametrize(
        "amount,expected",
        [
            (Decimal("1500"), "1500.00"),
            (Decimal("0.005"), "0.01"),
            (Decimal("2.344"), "2.34"),
            (12, "12.00"),
            (0.1, "0.10"),
        ],
    )
    def test_currency(self, amount, expected):
        assert format_currency_for_csv(amount) == expected
