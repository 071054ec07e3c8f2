"""Recognition grammar for FQN-shaped tokens.

The grammar is::

    fqn_token := (segment '.')* (segment | '_')
    segment   := letter (letter | digit | '_')*

It is anchored where matching starts but not at the end, so it picks out the
longest valid prefix: in ``foo.Bar(x)`` it matches ``foo.Bar``. Construction
through :class:`~fqnkit.fqn.Fqn` validates every segment again through
:class:`~fqnkit.name.Name`, which is built from the same character classes.
"""

from __future__ import annotations

import re
from threading import Lock

from .logging import get_logger

SEGMENT_GRAMMAR = r"[a-zA-Z][_a-zA-Z0-9]*"
# A lone underscore cannot run into further identifier characters.
NAME_GRAMMAR = rf"(?:{SEGMENT_GRAMMAR}|_\b)"
FQN_GRAMMAR = rf"(?:{SEGMENT_GRAMMAR}\.)*{NAME_GRAMMAR}"

_fqn_pattern: re.Pattern[str] | None = None
_pattern_lock = Lock()


def fqn_pattern() -> re.Pattern[str]:
    """Return the compiled recognition pattern, compiling it on first use.

    ``pattern.match(text, pos)`` anchors at ``pos``; use it rather than
    ``search`` when scanning token by token.
    """

    global _fqn_pattern

    if _fqn_pattern is None:
        with _pattern_lock:
            if _fqn_pattern is None:
                get_logger(action="compile_fqn_pattern").debug(
                    "compiling fqn recognition pattern: {}", FQN_GRAMMAR
                )
                _fqn_pattern = re.compile(FQN_GRAMMAR, re.ASCII)
    return _fqn_pattern


def recognize(text: str, pos: int = 0) -> str | None:
    """Return the FQN-shaped prefix of ``text`` starting at ``pos``, if any."""

    match = fqn_pattern().match(text, pos)
    if match is None:
        return None
    return match.group(0)
