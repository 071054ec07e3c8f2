from __future__ import annotations

import re
from concurrent.futures import ThreadPoolExecutor

import pytest

import fqnkit.grammar as grammar_mod
from fqnkit import FQN_GRAMMAR, Fqn, fqn_pattern, recognize


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("foo", "foo"),
        ("foo.Bar", "foo.Bar"),
        ("foo.Bar(x, y)", "foo.Bar"),
        ("a.b.c.Name rest", "a.b.c.Name"),
        ("foo.", "foo"),
        ("foo..bar", "foo"),
        ("foo.1bar", "foo"),
        ("a._", "a._"),
        ("_", "_"),
        ("_ = 1", "_"),
        ("_.a", "_"),
        ("a._b", "a"),
        ("x1_y2.z_", "x1_y2.z_"),
    ],
)
def test_recognize_matches_longest_valid_prefix(text: str, expected: str) -> None:
    assert recognize(text) == expected


@pytest.mark.parametrize("text", ["", "1abc", ".a", "_a", "__init__", "(foo)", " foo", "é"])
def test_recognize_rejects_non_name_start(text: str) -> None:
    assert recognize(text) is None


def test_recognize_from_position() -> None:
    text = "call(pkg.mod.func)"
    assert recognize(text, 5) == "pkg.mod.func"
    assert recognize(text, 4) is None


def test_recognized_tokens_construct_valid_fqns() -> None:
    for text in ("foo.Bar(", "a._ ", "_.x", "pkg.mod.Type;"):
        token = recognize(text)
        assert token is not None
        assert Fqn(token).as_string() == token


def test_grammar_source_can_be_embedded() -> None:
    call_re = re.compile(rf"({FQN_GRAMMAR})\(", re.ASCII)
    match = call_re.search("x = pkg.mod.build(1)")
    assert match is not None
    assert match.group(1) == "pkg.mod.build"


def test_fqn_pattern_is_compiled_once(monkeypatch) -> None:
    monkeypatch.setattr(grammar_mod, "_fqn_pattern", None)

    first = fqn_pattern()
    second = fqn_pattern()

    assert first is second
    assert first.pattern == FQN_GRAMMAR


def test_fqn_pattern_concurrent_first_use(monkeypatch) -> None:
    monkeypatch.setattr(grammar_mod, "_fqn_pattern", None)

    with ThreadPoolExecutor(max_workers=8) as pool:
        patterns = list(pool.map(lambda _: fqn_pattern(), range(32)))

    assert all(pattern is patterns[0] for pattern in patterns)
