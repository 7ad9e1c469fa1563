"""Tests for ComponentIdentity — construction, ordering, rendering."""

from __future__ import annotations

import itertools
from pathlib import Path

import pytest

from bundlekit.domain.errors import MissingHeaderError, VersionFormatError
from bundlekit.domain.identity import ComponentIdentity, compare, is_bundle
from bundlekit.domain.manifest import Attributes, Manifest, parse_manifest
from bundlekit.domain.version import Version


def _manifest(**headers: str) -> Manifest:
    return Manifest(
        main_attributes=Attributes((k.replace("_", "-"), v) for k, v in headers.items())
    )


def _ident(name: str, version: str, context: object = None) -> ComponentIdentity[object]:
    return ComponentIdentity(name, Version.parse(version), context)


class TestConstruction:
    def test_explicit_values(self) -> None:
        ctx = object()
        ident = ComponentIdentity("com.example.foo", Version(1, 0, 0), ctx)
        assert ident.name == "com.example.foo"
        assert ident.version == Version(1, 0, 0)
        assert ident.context is ctx

    def test_context_defaults_to_none(self) -> None:
        assert ComponentIdentity("a", Version.EMPTY).context is None

    def test_immutable(self) -> None:
        ident = _ident("a", "1.0")
        with pytest.raises(AttributeError):
            ident.name = "b"  # type: ignore[misc]
        with pytest.raises(AttributeError):
            ident._name = "b"  # type: ignore[misc]
        with pytest.raises(AttributeError):
            del ident._version

    def test_parametrized_generic(self) -> None:
        folder = Path("/bundles/a")
        ident = ComponentIdentity[Path]("a", Version(1, 0, 0), folder)
        assert ident.context is folder


class TestFromManifest:
    def test_strips_parameters(self) -> None:
        manifest = _manifest(
            Bundle_SymbolicName="com.example.foo;singleton:=true",
            Bundle_Version="1.2.3.qualifier",
        )
        ident = ComponentIdentity.from_manifest(manifest)
        assert ident.name == "com.example.foo"
        assert ident.version == Version(1, 2, 3, "qualifier")
        assert str(ident.version) == "1.2.3.qualifier"

    def test_name_keeps_surrounding_whitespace(self) -> None:
        manifest = _manifest(
            Bundle_SymbolicName="foo ;singleton:=true",
            Bundle_Version=" 1.0 ;x=y",
        )
        ident = ComponentIdentity.from_manifest(manifest)
        assert ident.name == "foo "
        assert ident.version == Version(1, 0, 0)

    def test_version_parameters_stripped(self) -> None:
        manifest = _manifest(Bundle_SymbolicName="a", Bundle_Version="2.0;foo=bar")
        assert ComponentIdentity.from_manifest(manifest).version == Version(2, 0, 0)

    def test_context_kept_by_reference(self) -> None:
        ctx = {"mutable": True}
        manifest = _manifest(Bundle_SymbolicName="a", Bundle_Version="1")
        assert ComponentIdentity.from_manifest(manifest, ctx).context is ctx

    def test_parsed_manifest(self) -> None:
        manifest = parse_manifest(
            "Manifest-Version: 1.0\nbundle-symbolicname: org.example.bar\n"
            "BUNDLE-VERSION: 3.1\n"
        )
        ident = ComponentIdentity.from_manifest(manifest)
        assert str(ident) == "org.example.bar:3.1.0"

    def test_missing_version(self) -> None:
        manifest = _manifest(Bundle_SymbolicName="a")
        with pytest.raises(MissingHeaderError) as excinfo:
            ComponentIdentity.from_manifest(manifest)
        assert excinfo.value.header == "Bundle-Version"
        assert "Bundle-Version" in str(excinfo.value)

    def test_missing_symbolic_name(self) -> None:
        manifest = _manifest(Bundle_Version="1.0")
        with pytest.raises(MissingHeaderError) as excinfo:
            ComponentIdentity.from_manifest(manifest)
        assert excinfo.value.header == "Bundle-SymbolicName"

    def test_bad_version(self) -> None:
        manifest = _manifest(Bundle_SymbolicName="a", Bundle_Version="1.x;foo=bar")
        with pytest.raises(VersionFormatError) as excinfo:
            ComponentIdentity.from_manifest(manifest)
        assert excinfo.value.text == "1.x"


class TestOrdering:
    def test_sort_by_name_then_version(self) -> None:
        items = [_ident("b", "1.0.0"), _ident("a", "2.0.0"), _ident("a", "1.0.0")]
        result = [(i.name, str(i.version)) for i in sorted(items)]
        assert result == [("a", "1.0.0"), ("a", "2.0.0"), ("b", "1.0.0")]

    def test_version_compared_semantically(self) -> None:
        assert _ident("a", "1.10") > _ident("a", "1.9")

    def test_name_uses_code_point_order(self) -> None:
        assert _ident("B", "9") < _ident("a", "1")

    def test_context_ignored(self) -> None:
        a = _ident("a", "1.0", "left")
        b = _ident("a", "1.0", "right")
        assert a == b
        assert hash(a) == hash(b)
        assert compare(a, b) == 0
        assert not a < b and not b < a

    def test_unhashable_context(self) -> None:
        ident = _ident("a", "1.0", ["list", "context"])
        assert ident in {ident}

    def test_not_equal_to_other_types(self) -> None:
        assert _ident("a", "1.0") != "a:1.0.0"
        with pytest.raises(TypeError):
            _ = _ident("a", "1.0") < "a"  # type: ignore[operator]

    def test_antisymmetry_and_transitivity(self) -> None:
        items = [
            _ident("a", "1.0.0"),
            _ident("a", "1.0.0.beta"),
            _ident("a", "2.0"),
            _ident("b", "0.1"),
            _ident("c", "0.0.1"),
        ]
        for x, y in itertools.product(items, repeat=2):
            assert compare(x, y) == -compare(y, x)
            assert (compare(x, y) < 0) == (x < y)
        for x, y, z in itertools.product(items, repeat=3):
            if compare(x, y) < 0 and compare(y, z) < 0:
                assert compare(x, z) < 0

    def test_reflexive(self) -> None:
        ident = _ident("a", "1.0")
        assert compare(ident, ident) == 0
        assert ident <= ident


class TestStr:
    def test_without_context(self) -> None:
        assert str(_ident("com.example.foo", "1.2.3")) == "com.example.foo:1.2.3"

    def test_with_context(self) -> None:
        ident = _ident("com.example.foo", "1.2.3.q", Path("/x/y"))
        assert str(ident) == "com.example.foo:1.2.3.q:/x/y"

    def test_repr(self) -> None:
        assert repr(_ident("a", "1")) == "ComponentIdentity(name='a', version='1.0.0', context=None)"


class TestIsBundle:
    def test_none(self) -> None:
        assert is_bundle(None) is False

    def test_both_headers(self) -> None:
        manifest = _manifest(Bundle_SymbolicName="", Bundle_Version="not-a-version")
        assert is_bundle(manifest) is True

    @pytest.mark.parametrize(
        "headers",
        [
            {"Bundle_SymbolicName": "a"},
            {"Bundle_Version": "1.0"},
            {"Manifest_Version": "1.0"},
            {},
        ],
    )
    def test_missing_header(self, headers: dict[str, str]) -> None:
        assert is_bundle(_manifest(**headers)) is False
