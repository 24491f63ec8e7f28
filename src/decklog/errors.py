"""Error hierarchy for decklog.

The diff engine and reconstructor never raise: applying an entry that does
not match the base is a structural no-op.  Errors only come from the
consumer layer (the :class:`~decklog.deck.Deck` aggregate and the deck-list
parser).

Every public error class inherits from :class:`DecklogError`.  Each carries
a machine-readable ``code`` (from :class:`ErrorCode`), a human-readable
``message``, an optional structured ``context`` dict, and an optional
``cause`` (chained exception).
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Machine-readable error codes for every error decklog can raise."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    COMMIT_ERROR = "COMMIT_ERROR"
    NOTHING_TO_COMMIT = "NOTHING_TO_COMMIT"
    MESSAGE_REQUIRED = "MESSAGE_REQUIRED"
    VERSION_NOT_FOUND = "VERSION_NOT_FOUND"
    PARSE_ERROR = "PARSE_ERROR"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class DecklogError(Exception):
    """Base exception for all decklog errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string) identifying the
        error category.
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
        Keys are documented per subclass.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


# ---------------------------------------------------------------------------
# Deck errors
# ---------------------------------------------------------------------------

class DecklogValidationError(DecklogError):
    """The working copy breaks a deck-building rule.

    Context keys: ``deck_id``, ``issues`` (list of
    :class:`~decklog.models.ValidationIssue`).
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


class DecklogCommitError(DecklogError):
    """A commit was refused.

    The ``code`` distinguishes an empty working-copy difference
    (``NOTHING_TO_COMMIT``) from a blank commit message
    (``MESSAGE_REQUIRED``).

    Context keys: ``deck_id``, ``next_sequence``.
    """

    def __init__(
        self,
        code: str = ErrorCode.COMMIT_ERROR,
        message: str = "Commit error",
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            context=context,
            cause=cause,
        )


class DecklogVersionNotFoundError(DecklogError):
    """The requested sequence number is not present in the version log.

    Context keys: ``deck_id``, ``sequence``, ``latest``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.VERSION_NOT_FOUND,
            message=message,
            context=context,
            cause=cause,
        )


# ---------------------------------------------------------------------------
# Deck-list errors
# ---------------------------------------------------------------------------

class DecklogParseError(DecklogError):
    """A Markdown deck list could not be turned into any card.

    Context keys: ``warnings`` (list of skipped-line descriptions).
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.PARSE_ERROR,
            message=message,
            context=context,
            cause=cause,
        )
