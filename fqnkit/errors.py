from __future__ import annotations


class FqnError(Exception):
    """Base class for all fqnkit errors."""


class IdentifierValidationError(FqnError, ValueError):
    """Raised when a name segment does not satisfy the identifier grammar."""

    def __init__(
        self,
        text: str,
        *,
        source: str | None = None,
        position: int | None = None,
    ) -> None:
        self.text = text
        self.source = source
        self.position = position
        if source is None:
            message = f"Invalid identifier {text!r}."
        else:
            message = f"Invalid identifier {text!r} at segment {position} of {source!r}."
        super().__init__(message)
