"""Tests for next_invoice_number."""

from faktur.core.invoice_numbering import next_invoice_number


def test_first_number():
    assert next_invoice_number([]) == "INV-00001"


def test_increments_the_highest_suffix():
    assert next_invoice_number(["INV-00002", "INV-00010", "INV-00003"]) == "INV-00011"


def test_ignores_foreign_and_malformed_numbers():
    existing = ["INV-00004", "Q-00099", "INV-abc", "INV-", None, "INV-٥٥"]
    assert next_invoice_number(existing) == "INV-00005"


def test_custom_prefix():
    assert next_invoice_number(["F-2025-00007"], prefix="F-2025-") == "F-2025-00008"


def test_grows_past_the_padding_width():
    assert next_invoice_number(["INV-99999"]) == "INV-100000"
