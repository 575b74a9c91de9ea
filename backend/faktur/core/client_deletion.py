"""Client Deletion Guard — confirmation check for the destructive client cascade.

Invariants:
    - PURE: compares strings, never touches storage
    - Match is case-insensitive and ignores surrounding whitespace
    - An empty confirmation never matches, even against an empty stored email
"""

from faktur.core.errors import ConfirmationMismatchError, ErrorContext


def confirmation_matches(stored_email: str | None, confirmation: str | None) -> bool:
    expected = (stored_email or "").strip().casefold()
    given = (confirmation or "").strip().casefold()
    return bool(given) and given == expected


def check_deletion_confirmation(
    stored_email: str | None, confirmation: str | None, client_id: str | None = None,
) -> None:
    """Raise ConfirmationMismatchError unless the user retyped the client's email."""
    if not confirmation_matches(stored_email, confirmation):
        raise ConfirmationMismatchError(
            "Client", ErrorContext(client_id=client_id),
        )
