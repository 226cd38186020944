"""Tests for studiovault.doctor.lockfile."""

from __future__ import annotations

from studiovault.doctor.lockfile import extract_versions

PNPM_V9 = """\
lockfileVersion: '9.0'

importers:
  apps/web/site:
    dependencies:
      react:
        specifier: 19.1.0
        version: 19.1.0
      react-dom:
        specifier: 19.1.0
        version: 19.1.0(react@19.1.0)

packages:
  '@types/react@19.1.2':
    resolution: {integrity: sha512-aaa}
  react-dom@19.1.0:
    resolution: {integrity: sha512-bbb}
  react@19.1.0:
    resolution: {integrity: sha512-ccc}
"""


def test_single_version() -> None:
    assert extract_versions(PNPM_V9, "react") == ["react@19.1.0"]


def test_scoped_packages_are_ignored() -> None:
    text = "'@types/react@18.3.3':\n'@acme/react@1.0.0':\n"
    assert extract_versions(text, "react") == []


def test_lookalike_names_are_ignored() -> None:
    text = "preact@10.19.0:\nreact-dom@19.1.0:\nmy.react@2.0.0:\n"
    assert extract_versions(text, "react") == []


def test_multiple_versions_first_seen_order() -> None:
    text = "/react@18.2.0:\n  x\nreact@19.1.0:\n  y\n/react@18.2.0(foo):\n"
    assert extract_versions(text, "react") == ["react@18.2.0", "react@19.1.0"]


def test_peer_suffix_counts() -> None:
    text = "react-dom@19.1.0(react@19.0.0):\n"
    assert extract_versions(text, "react") == ["react@19.0.0"]


def test_empty_lockfile() -> None:
    assert extract_versions("lockfileVersion: '9.0'\n", "react") == []
