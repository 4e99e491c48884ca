"""
Shared test fixtures and configuration.
"""

import stat
from pathlib import Path

import pytest

from inception.adapters.mock import MockToolchain
from inception.core.models.descriptor import TypeDescriptor


@pytest.fixture
def gopath(tmp_path: Path) -> Path:
    """A GOPATH-style root: <tmp>/gopath."""
    root = tmp_path / "gopath"
    root.mkdir()
    return root


@pytest.fixture
def go_package(gopath: Path) -> Path:
    """A Go package directory at <gopath>/src/example.com/models."""
    pkg = gopath / "src" / "example.com" / "models"
    pkg.mkdir(parents=True)
    return pkg


@pytest.fixture
def input_file(go_package: Path) -> Path:
    """A Go source file declaring two types."""
    path = go_package / "user.go"
    path.write_text("package models\n\ntype A struct{}\n\ntype B struct{}\n")
    return path


@pytest.fixture
def descriptors() -> list[TypeDescriptor]:
    return [
        TypeDescriptor(name="A", options={"X": True}),
        TypeDescriptor(name="B", options={"X": False}),
    ]


@pytest.fixture
def mock_toolchain() -> MockToolchain:
    """Mock toolchain whose identity query succeeds."""
    return MockToolchain(identity="example.com/models")


@pytest.fixture
def transient_artifacts():
    """Return a function listing inception temp dirs and bridge files in a directory."""

    def _list(directory: Path) -> list[str]:
        return sorted(
            p.name
            for p in directory.iterdir()
            if p.name.startswith("ffjson-inception") or "_ffjson_expose" in p.name
        )

    return _list


def _write_script(path: Path, body: str) -> Path:
    path.write_text("#!/bin/sh\n" + body)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def fake_go(tmp_path: Path):
    """Factory for a fake ``go`` executable.

    ``go list <dir>`` prints example.com/fake/<basename of dir> and its cwd
    on stderr (or fails),
    ``go run -a <file>`` prints its cwd and arguments (or fails with
    "undefined: Foo" on stderr).
    """
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir(exist_ok=True)

    def _make(list_ok: bool = True, run_ok: bool = True, name: str = "go") -> Path:
        list_branch = (
            'echo "cwd=$(pwd)" >&2; echo "example.com/fake/$(basename "$2")"'
            if list_ok
            else 'echo "go: cannot find main module" >&2; exit 1'
        )
        run_branch = (
            'echo "cwd=$(pwd)"; echo "args=$*"'
            if run_ok
            else 'echo "building..."; echo "$3:7:2: undefined: Foo" >&2; exit 2'
        )
        body = (
            'case "$1" in\n'
            f"  list) {list_branch} ;;\n"
            f"  run) {run_branch} ;;\n"
            '  *) echo "unknown command $1" >&2; exit 2 ;;\n'
            "esac\n"
        )
        return _write_script(bin_dir / name, body)

    return _make


@pytest.fixture
def fake_gofmt(tmp_path: Path):
    """Factory for a fake ``gofmt``: echoes stdin, or fails with a syntax error."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir(exist_ok=True)

    def _make(ok: bool = True, name: str = "gofmt") -> Path:
        body = "cat\n" if ok else 'cat >/dev/null; echo "<standard input>:3:1: expected declaration" >&2; exit 2\n'
        return _write_script(bin_dir / name, body)

    return _make
