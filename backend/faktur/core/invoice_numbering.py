"""Invoice Numbering — next human-facing invoice number from the existing ones.

Invariants:
    - Format: <prefix><5-digit zero-padded sequence>, e.g. INV-00042
    - Next number is max(existing numeric suffix) + 1; numbers with other prefixes
      or non-numeric suffixes are ignored
    - Uniqueness is expected, not enforced here
"""

from typing import Iterable


DEFAULT_PREFIX = "INV-"
SEQUENCE_WIDTH = 5


def next_invoice_number(existing: Iterable[str], prefix: str = DEFAULT_PREFIX) -> str:
    highest = 0
    for number in existing:
        if not number or not number.startswith(prefix):
            continue
        suffix = number[len(prefix):]
        if suffix.isascii() and suffix.isdigit():
            highest = max(highest, int(suffix))
    return f"{prefix}{highest + 1:0{SEQUENCE_WIDTH}d}"
