from collections import Counter, OrderedDict, defaultdict, deque
from dataclasses import dataclass
import types
from typing import Any

import pytest

from . import pformat


class MyDict(dict):
    pass


class MultilineObject:
    def __repr__(self) -> str:
        return "A\nB"


@dataclass
class Point:
    x: int
    y: int


def _expanded(open: str, lines: list[str], close: str, *, guide: str = "│ ") -> str:
    return open + "\n" + "".join(f"{guide}{line},\n" for line in lines) + close


@pytest.mark.parametrize(
    "obj, expected",
    [
        ([], "[]"),
        ([1, 2, 3], "[1, 2, 3]"),
        ((), "()"),
        ((1,), "(1,)"),
        ((1, 2), "(1, 2)"),
        ({}, "{}"),
        ({"a": 1, "b": [2]}, "{'a': 1, 'b': [2]}"),
        (set(), "set()"),
        ({1}, "{1}"),
        (frozenset(), "frozenset()"),
        (frozenset({1}), "frozenset({1})"),
        (deque(), "deque([])"),
        (deque([1, 2]), "deque([1, 2])"),
        (defaultdict(list), "defaultdict(<class 'list'>, {})"),
        (defaultdict(list, {"a": [1]}), "defaultdict(<class 'list'>, {'a': [1]})"),
        (defaultdict(None, {"a": 1}), "defaultdict(None, {'a': 1})"),
        (Counter(), "Counter()"),
        (Counter("abb"), "Counter({'b': 2, 'a': 1})"),
        (OrderedDict(), "OrderedDict()"),
        (OrderedDict(a=1), "OrderedDict({'a': 1})"),
        (types.MappingProxyType({"a": 1}), "mappingproxy({'a': 1})"),
        (MyDict(), "MyDict({})"),
        (MyDict(a=1), "MyDict({'a': 1})"),
        ([Point(1, 2)], "[Point(x=1, y=2)]"),
        ({"p": (None, True)}, "{'p': (None, True)}"),
    ],
)
def test_container_format(obj: Any, expected: str) -> None:
    assert pformat(obj) == expected


def test_long_list_is_expanded() -> None:
    assert pformat(list(range(30))) == _expanded("[", [str(i) for i in range(30)], "]")


def test_long_list_is_compact_when_requested() -> None:
    assert pformat(list(range(30)), compact=True) == repr(list(range(30)))


def test_long_list_without_guide() -> None:
    assert pformat(list(range(30)), show_indent=False) == _expanded(
        "[", [str(i) for i in range(30)], "]", guide="  "
    )


@pytest.mark.parametrize("width, fits", [(7, True), (6, False)])
def test_list_fits_width(width: int, fits: bool) -> None:
    expected = "[1, 2]" if fits else _expanded("[", ["1", "2"], "]")
    assert pformat([1, 2], width=width) == expected


def test_nested_expansion() -> None:
    expected = (
        "{\n│ 'key': [\n" + "".join(f"│ │ {i},\n" for i in range(30)) + "│ ],\n│ 'other': 1,\n}"
    )
    assert pformat({"key": list(range(30)), "other": 1}) == expected


def test_expanded_tuple_with_one_element() -> None:
    assert pformat((list(range(30)),), compact=True) == f"({list(range(30))!r},)"
    assert pformat(("x" * 100,)) == _expanded("(", [repr("x" * 100)], ")")


def test_named_container_expansion() -> None:
    assert pformat(deque(range(30))) == _expanded(
        "deque([", [str(i) for i in range(30)], "])"
    )


def test_multiline_elements() -> None:
    assert pformat([MultilineObject(), 1]) == "[\n│ A\n│ B,\n│ 1,\n]"


def test_multiline_dict_values() -> None:
    assert pformat({"k": MultilineObject()}) == "{\n│ 'k': A\n│ B,\n}"


@pytest.mark.parametrize("compact", [False, True])
def test_recursive_containers(compact: bool) -> None:
    items: list[Any] = [1]
    items.append(items)
    mapping: dict[str, Any] = {}
    mapping["self"] = mapping

    assert pformat(items, compact=compact) == "[1, [...]]"
    assert pformat(mapping, compact=compact) == "{'self': {...}}"


def test_shared_values_are_not_recursive() -> None:
    shared = [1]
    assert pformat([shared, shared]) == "[[1], [1]]"


def test_container_colors() -> None:
    assert pformat({"a": 1}, color=True, number=196) == (
        "{\x1b[33m'a'\x1b[39m: \x1b[38;5;196m1\x1b[39m}"
    )
