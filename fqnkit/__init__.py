from __future__ import annotations

from .errors import FqnError, IdentifierValidationError
from .fqn import FQN_SEPARATOR, Fqn
from .grammar import FQN_GRAMMAR, NAME_GRAMMAR, SEGMENT_GRAMMAR, fqn_pattern, recognize
from .logging import configure_cli_logger, get_log_mode, get_logger, set_log_mode
from .name import Name
from .scan import FqnToken, find_fqns, iter_fqn_tokens

__all__ = [
    "Fqn",
    "Name",
    "FqnError",
    "IdentifierValidationError",
    "FQN_SEPARATOR",
    "FQN_GRAMMAR",
    "NAME_GRAMMAR",
    "SEGMENT_GRAMMAR",
    "fqn_pattern",
    "recognize",
    "FqnToken",
    "iter_fqn_tokens",
    "find_fqns",
    "get_logger",
    "set_log_mode",
    "get_log_mode",
    "configure_cli_logger",
]
