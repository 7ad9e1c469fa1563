"""Shared pytest fixtures and test helpers for bundlekit tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from bundlekit.domain.manifest import Attributes, Manifest
from bundlekit.infrastructure.filesystem import write_manifest


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep a developer's bundlekit.toml and BUNDLEKIT_* env vars out of tests."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("BUNDLEKIT_CONFIG", raising=False)
    monkeypatch.delenv("BUNDLEKIT_MANIFEST__META_INF_DIR", raising=False)
    monkeypatch.delenv("BUNDLEKIT_MANIFEST__MANIFEST_NAME", raising=False)


@pytest.fixture
def make_bundle(tmp_path: Path) -> Callable[..., Path]:
    """Factory that lays out an exploded bundle under ``tmp_path``.

    Usage::

        folder = make_bundle("com.example.foo", "1.0.0")
    """

    def _make(
        symbolic_name: str | None,
        version: str | None,
        *,
        dirname: str | None = None,
    ) -> Path:
        headers = {"Manifest-Version": "1.0"}
        if symbolic_name is not None:
            headers["Bundle-SymbolicName"] = symbolic_name
        if version is not None:
            headers["Bundle-Version"] = version
        folder = tmp_path / (dirname or f"{symbolic_name}_{version}")
        folder.mkdir(parents=True, exist_ok=True)
        write_manifest(folder, Manifest(main_attributes=Attributes(headers)))
        return folder

    return _make
