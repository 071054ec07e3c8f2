from __future__ import annotations

from functools import total_ordering
from typing import Any, Iterable, Iterator

from .errors import IdentifierValidationError
from .name import Name

FQN_SEPARATOR = "."


def _require_name(value: Any) -> Name:
    if not isinstance(value, Name):
        raise TypeError(f"Fqn segments must be Name, got {type(value).__name__}")
    return value


@total_ordering
class Fqn:
    """Fully-qualified name path, e.g. ``package.module1.module2.Type``.

    An ``Fqn`` is a non-empty, ordered list of :class:`Name` segments, outer
    scope first. It is built by parsing a dotted string (``Fqn(text)`` or
    ``Fqn.new(text)``) or by promoting one name (``Fqn.from_name``), and can
    be extended in place with :meth:`push`.

    Equality is element-wise. A one-segment ``Fqn`` also equals the bare
    ``Name`` it wraps, in both directions. ``push`` changes the hash, so do
    not push into an ``Fqn`` that is a dict key or a set member.
    """

    __slots__ = ("_names",)

    def __init__(self, text: str) -> None:
        if not isinstance(text, str):
            raise TypeError(f"Fqn expects str, got {type(text).__name__}")
        names: list[Name] = []
        for position, part in enumerate(text.split(FQN_SEPARATOR)):
            try:
                names.append(Name.validate(part))
            except IdentifierValidationError:
                raise IdentifierValidationError(
                    part, source=text, position=position
                ) from None
        if not names:
            raise AssertionError(f"parsing {text!r} produced no segments")
        self._names = names

    @classmethod
    def new(cls, text: str) -> Fqn:
        return cls(text)

    @classmethod
    def try_new(cls, text: Any) -> Fqn | None:
        try:
            return cls(text)
        except (IdentifierValidationError, TypeError):
            return None

    @classmethod
    def from_name(cls, name: Name) -> Fqn:
        return cls._from_list([_require_name(name)])

    @classmethod
    def from_names(cls, names: Iterable[Name]) -> Fqn:
        collected = [_require_name(name) for name in names]
        if not collected:
            raise ValueError("Fqn requires at least one name")
        return cls._from_list(collected)

    @classmethod
    def _from_list(cls, names: list[Name]) -> Fqn:
        fqn = cls.__new__(cls)
        fqn._names = names
        return fqn

    def push(self, name: Name) -> None:
        self._names.append(_require_name(name))

    def child(self, name: Name) -> Fqn:
        return self._from_list([*self._names, _require_name(name)])

    def parent(self) -> Fqn | None:
        if self.is_simple():
            return None
        return self._from_list(self._names[:-1])

    def copy(self) -> Fqn:
        return self._from_list(list(self._names))

    __copy__ = copy

    @property
    def parts(self) -> tuple[Name, ...]:
        return tuple(self._names)

    def as_string(self) -> str:
        return FQN_SEPARATOR.join(name.as_str() for name in self._names)

    def is_simple(self) -> bool:
        return len(self._names) == 1

    def as_simple_name(self) -> Name | None:
        if self.is_simple():
            return self._names[0]
        return None

    def leaf(self) -> Name:
        return self._names[-1]

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[Name]:
        return iter(tuple(self._names))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Fqn):
            return self._names == other._names
        if isinstance(other, Name):
            return self.as_simple_name() == other
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, Name):
            other = self.from_name(other)
        if not isinstance(other, Fqn):
            return NotImplemented
        return [n.as_str() for n in self._names] < [n.as_str() for n in other._names]

    def __hash__(self) -> int:
        # A simple Fqn equals its Name, so it must hash like it.
        simple = self.as_simple_name()
        if simple is not None:
            return hash(simple)
        return hash(tuple(self._names))

    def __str__(self) -> str:
        return self.as_string()

    def __repr__(self) -> str:
        return f"Fqn({self.as_string()!r})"
