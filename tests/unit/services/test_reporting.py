"""Tests for report rows, formatting and CSV rendering."""

import csv
import io
from datetime import UTC, date, datetime

import pytest

from siteledger.core.entities import CurrentInventoryItem
from siteledger.core.services.reconciliation import enrich, reconcile
from siteledger.core.services.reporting import (
    INVENTORY_COLUMNS,
    SUMMARY_COLUMNS,
    TRANSACTION_COLUMNS,
    ExportKind,
    export_filename,
    export_rows,
    format_currency,
    format_datetime,
    format_quantity,
    to_csv,
)


class TestFormatting:
    @pytest.mark.parametrize(
        "amount, expected",
        [(0, "₱0.00"), (1234.5, "₱1,234.50"), (1_000_000, "₱1,000,000.00")],
    )
    def test_currency(self, amount, expected):
        assert format_currency(amount) == expected

    def test_currency_custom_symbol(self):
        assert format_currency(12, symbol="$") == "$12.00"

    def test_datetime(self):
        assert format_datetime(datetime(2026, 10, 5, 14, 30, tzinfo=UTC)) == "Oct 5, 2026, 02:30 PM"
        assert format_datetime(datetime(2026, 1, 15, 9, 5)) == "Jan 15, 2026, 09:05 AM"

    @pytest.mark.parametrize("value, expected", [(5.0, "5"), (2.5, "2.5"), (0, "0")])
    def test_quantity(self, value, expected):
        assert format_quantity(value) == expected


@pytest.fixture
def ledger(make_record):
    return [
        make_record("checked_out", 10, reorder_point=5),
        make_record("returned", 2),
        make_record("adjusted", 3),
        make_record("checked_out", 4, product_id="SAND", sale_price=12.5),
    ]


@pytest.fixture
def snapshot(ledger, sample_product):
    return enrich(reconcile(ledger), {sample_product.product_id: sample_product})


class TestTransactionsExport:
    def test_header_and_one_row_per_record(self, ledger, snapshot):
        rows = export_rows(ExportKind.TRANSACTIONS, ledger, snapshot)

        assert rows[0] == TRANSACTION_COLUMNS
        assert len(rows) == len(ledger) + 1

    def test_row_contents(self, ledger, snapshot):
        rows = export_rows("transactions", ledger, snapshot)
        first = dict(zip(TRANSACTION_COLUMNS, rows[1]))

        assert first["Transaction ID"] == "PI-0001"
        assert first["Item Name"] == "Portland Cement 40kg"
        assert first["Action"] == "Transferred to Project"
        assert first["Quantity"] == "10"
        assert first["Sale Price"] == "₱50.00"
        assert first["Total Cost"] == "₱500.00"
        assert first["Project Reorder Point"] == "5"
        assert first["Action By"] == "Ana Admin"
        assert first["Role"] == "admin"
        assert first["Date & Time"] == "Mar 2, 2024, 08:01 AM"

    def test_labels_and_missing_values(self, ledger, snapshot):
        rows = export_rows("transactions", ledger, snapshot)
        by_id = {row[0]: dict(zip(TRANSACTION_COLUMNS, row)) for row in rows[1:]}

        assert by_id["PI-0002"]["Action"] == "Returned to Main"
        assert by_id["PI-0003"]["Action"] == "Adjusted"
        assert by_id["PI-0003"]["Project Reorder Point"] == "Not set"
        # Unknown to the catalog: the product ID stands in for the name
        assert by_id["PI-0004"]["Item Name"] == "SAND"


class TestInventoryExport:
    def test_rows(self, ledger, snapshot):
        rows = export_rows("inventory", ledger, snapshot)
        assert rows[0] == INVENTORY_COLUMNS

        cement = dict(zip(INVENTORY_COLUMNS, rows[1]))
        assert cement["Current Quantity"] == "5"
        assert cement["Total Transferred In"] == "10"
        assert cement["Total Returned Out"] == "2"
        assert cement["Total Adjusted"] == "3"
        assert cement["Total Cost"] == "₱250.00"
        assert cement["Stock Status"] == "Low Stock"
        assert cement["Location"] == "Bay 3"
        assert cement["Last Transaction ID"] == "PI-0003"

        sand = dict(zip(INVENTORY_COLUMNS, rows[2]))
        assert sand["Category"] == "Uncategorized"
        assert sand["Project Reorder Point"] == "Not set"
        assert sand["Location"] == "N/A"
        assert sand["Stock Status"] == "In Stock"

    def test_missing_last_transaction(self):
        item = CurrentInventoryItem(project_id="P", product_id="X", current_quantity=1)
        row = dict(zip(INVENTORY_COLUMNS, export_rows("inventory", [], [item])[1]))
        assert row["Last Transaction ID"] == "N/A"
        assert row["Last Transaction Date"] == "N/A"


class TestSummaryExport:
    def test_one_row_per_category(self, ledger, snapshot):
        rows = export_rows("summary", ledger, snapshot)

        assert rows[0] == SUMMARY_COLUMNS
        assert rows[1] == ["Cement", "1", "5", "₱250.00", "1", "1"]
        assert rows[2] == ["Uncategorized", "1", "4", "₱50.00", "0", "0"]

    def test_empty_snapshot_has_header_only(self):
        assert export_rows("summary", [], []) == [SUMMARY_COLUMNS]


class TestCsv:
    def test_every_field_quoted(self):
        text = to_csv([["a", "b"], ["1", "x"]])
        assert text == '"a","b"\n"1","x"\n'

    def test_embedded_quotes_and_commas(self):
        text = to_csv([["note"], ['Said "ok", then left']])
        assert text.splitlines()[1] == '"Said ""ok"", then left"'
        assert list(csv.reader(io.StringIO(text)))[1] == ['Said "ok", then left']

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValueError):
            export_rows("pdf", [], [])


def test_export_filename():
    assert (
        export_filename(ExportKind.SUMMARY, "PRJ-001", date(2026, 10, 5))
        == "project-inventory-summary-PRJ-001-2026-10-05.csv"
    )
