from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from .errors import IdentifierValidationError
from .grammar import NAME_GRAMMAR

_NAME_RE = re.compile(NAME_GRAMMAR, re.ASCII)


@dataclass(frozen=True, eq=False, repr=False)
class Name:
    """One dot-free segment of a fully-qualified name.

    A name is an ASCII letter followed by letters, digits or underscores, or
    the bare underscore ``_``. Instances are validated on construction, so
    holding a ``Name`` means holding a valid segment.

    Equality with a one-segment :class:`~fqnkit.fqn.Fqn` is handled by
    ``Fqn.__eq__``: this class returns ``NotImplemented`` for anything that is
    not a ``Name`` and Python falls back to the reflected comparison.
    """

    text: str

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise TypeError(f"Name expects str, got {type(self.text).__name__}")
        if _NAME_RE.fullmatch(self.text) is None:
            raise IdentifierValidationError(self.text)

    @classmethod
    def validate(cls, text: str) -> Name:
        return cls(text)

    @classmethod
    def try_validate(cls, text: Any) -> Name | None:
        try:
            return cls(text)
        except (IdentifierValidationError, TypeError):
            return None

    def as_str(self) -> str:
        return self.text

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Name):
            return self.text == other.text
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.text)

    def __len__(self) -> int:
        return len(self.text)

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"Name({self.text!r})"
