from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from .fqn import Fqn
from .grammar import fqn_pattern
from .logging import get_logger

_IDENTIFIER_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_"
)
_TOKEN_START_CHARS = _IDENTIFIER_CHARS - frozenset("0123456789")


@dataclass(frozen=True)
class FqnToken:
    """One FQN-shaped token found in a text, with its ``[start, end)`` span."""

    text: str
    start: int
    end: int

    @property
    def fqn(self) -> Fqn:
        return Fqn(self.text)


def _continues_word(char: str) -> bool:
    return char in _IDENTIFIER_CHARS or char.isalnum()


def _can_start_at(text: str, pos: int) -> bool:
    if text[pos] not in _TOKEN_START_CHARS:
        return False
    if pos == 0:
        return True
    previous = text[pos - 1]
    return not _continues_word(previous) and previous != "."


def _runs_on(text: str, end: int) -> bool:
    return end < len(text) and _continues_word(text[end])


def iter_fqn_tokens(text: str) -> Iterator[FqnToken]:
    """Yield the FQN-shaped tokens of ``text`` from left to right.

    A token only starts where the previous character is neither a word
    character nor a dot, and only ends where the next one is not a word
    character. So ``1abc``, ``x.1y`` and ``café`` yield nothing for the
    partial words ``abc``, ``y`` and ``caf``.
    """

    pattern = fqn_pattern()
    pos = 0
    length = len(text)
    while pos < length:
        if _can_start_at(text, pos):
            match = pattern.match(text, pos)
            if match is not None and not _runs_on(text, match.end()):
                yield FqnToken(match.group(0), match.start(), match.end())
                pos = match.end()
                continue
        pos += 1


def find_fqns(text: str) -> list[Fqn]:
    tokens = list(iter_fqn_tokens(text))
    get_logger(action="find_fqns").debug(
        "found {} fqn token(s) in {} character(s)", len(tokens), len(text)
    )
    return [token.fqn for token in tokens]
