"""Tests for info/reflection.py module."""

from __future__ import annotations

import builtins
import collections
import textwrap
from types import ModuleType

import pytest

from symbolinfo.info.reflection import PythonReflector, class_name

SHAPES_SOURCE = textwrap.dedent(
    '''
    class Shape:
        """Base shape."""

        sides = 0

        def area(self):
            """Area of the shape."""

        @staticmethod
        def unit():
            pass

        @classmethod
        def named(cls, name):
            pass

        @property
        def label(self):
            raise RuntimeError("getter ran")


    class Square(Shape):
        def __init__(self, size):
            self.size = size

        def area(self):
            pass


    class Circle:
        def area(self, precision=2):
            pass
    '''
)


@pytest.fixture
def shapes() -> ModuleType:
    module = ModuleType("shapes")
    exec(compile(SHAPES_SOURCE, "<shapes>", "exec"), vars(module))  # noqa: S102
    return module


@pytest.fixture
def reflector(shapes: ModuleType) -> PythonReflector:
    return PythonReflector(
        {"shapes": shapes, "builtins": builtins, "collections": collections},
        stdlib_names={"collections"},
    )


class TestFindClass:
    """Tests for class lookup."""

    def test_global_of_namespace(self, reflector: PythonReflector) -> None:
        cls = reflector.find_class("shapes", "Square")
        assert cls is not None
        assert class_name(cls) == "shapes.Square"

    def test_qualified_through_loaded_module(self, reflector: PythonReflector) -> None:
        cls = reflector.find_class(None, "shapes.Circle")
        assert cls is not None
        assert cls.__name__ == "Circle"

    def test_builtin(self, reflector: PythonReflector) -> None:
        assert reflector.find_class(None, "dict") is dict

    @pytest.mark.parametrize("dotted", ["shapes.Nope", "shapes.Shape.sides", "", "nowhere.X"])
    def test_not_a_class(self, reflector: PythonReflector, dotted: str) -> None:
        assert reflector.find_class(None, dotted) is None


class TestResolveClassOrMember:
    """Tests for symbol-shaped class and member references."""

    def test_class(self, reflector: PythonReflector) -> None:
        info = reflector.resolve_class_or_member("shapes", "Square")
        assert info is not None
        assert info["class"] == "shapes.Square"
        assert info["bases"] == ["shapes.Shape"]
        assert info["javadoc"] == "shapes.Square.html"
        assert [p.name for p in info["arglists"][0]] == ["size"]

    def test_class_dot_member(self, reflector: PythonReflector) -> None:
        info = reflector.resolve_class_or_member("shapes", "Square.area")
        assert info is not None
        assert info["class"] == "shapes.Square"
        assert info["member"] == "area"
        assert info["member_kind"] == "method"
        assert info["javadoc"] == "shapes.Square.area.html"

    def test_ambiguous_member_gives_sorted_candidates(self, reflector: PythonReflector) -> None:
        info = reflector.resolve_class_or_member("shapes", "area")
        assert info is not None
        assert list(info["candidates"]) == ["shapes.Circle", "shapes.Shape", "shapes.Square"]
        assert info["candidates"]["shapes.Circle"]["member"] == "area"

    def test_leading_dot_member(self, reflector: PythonReflector) -> None:
        info = reflector.resolve_class_or_member("shapes", ".unit")
        assert info is not None
        assert info["class"] == "shapes.Shape"
        assert info["member_kind"] == "staticmethod"

    @pytest.mark.parametrize(
        ("member", "kind"),
        [("named", "classmethod"), ("label", "property"), ("sides", "attribute")],
    )
    def test_member_kinds(self, reflector: PythonReflector, member: str, kind: str) -> None:
        info = reflector.resolve_class_or_member("shapes", member)
        assert info is not None
        assert info["member_kind"] == kind

    def test_property_getter_never_runs(self, reflector: PythonReflector) -> None:
        info = reflector.resolve_class_or_member("shapes", "Shape.label")
        assert info is not None
        assert "arglists" not in info

    def test_unknown(self, reflector: PythonReflector) -> None:
        assert reflector.resolve_class_or_member("shapes", "nothing_here") is None
        assert reflector.resolve_class_or_member("shapes", "not-a-name") is None


class TestMemberInfo:
    """Tests for class + member references."""

    def test_member_of_qualified_class(self, reflector: PythonReflector) -> None:
        info = reflector.member_info("shapes.Shape", "named")
        assert info is not None
        assert info["member_kind"] == "classmethod"
        assert [p.name for p in info["arglists"][0]] == ["cls", "name"]

    def test_no_member_gives_class(self, reflector: PythonReflector) -> None:
        info = reflector.member_info("shapes.Shape", None)
        assert info is not None
        assert info["doc"] == "Base shape."
        assert "member" not in info

    def test_builtin_member(self, reflector: PythonReflector) -> None:
        info = reflector.member_info("dict", "get")
        assert info is not None
        assert info["class"] == "builtins.dict"
        assert info["javadoc"] == "stdtypes.html#dict.get"

    def test_missing(self, reflector: PythonReflector) -> None:
        assert reflector.member_info("shapes.Shape", "nope") is None
        assert reflector.member_info("nowhere.Cls", "x") is None


class TestDocPath:
    """Tests for relative documentation paths."""

    @pytest.mark.parametrize(
        ("cls", "member", "expected"),
        [
            (dict, None, "stdtypes.html#dict"),
            (ValueError, None, "exceptions.html#ValueError"),
            (collections.OrderedDict, "move_to_end", "collections.html#collections.OrderedDict.move_to_end"),
        ],
    )
    def test_stdlib_paths(
        self, reflector: PythonReflector, cls: type, member: str | None, expected: str
    ) -> None:
        assert reflector.doc_path(cls, member) == expected

    def test_third_party_path(self, reflector: PythonReflector, shapes: ModuleType) -> None:
        assert reflector.doc_path(shapes.Circle) == "shapes.Circle.html"
