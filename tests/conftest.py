from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Mapping

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


TemplateFactory = Callable[..., Path]


def write_template(
    store: Path,
    directory: str,
    metadata: str | None,
    files: Mapping[str, str | bytes] | None = None,
) -> Path:
    root = store / directory
    root.mkdir(parents=True, exist_ok=True)
    if metadata is not None:
        (root / ".meta.toml").write_text(metadata, encoding="utf-8")
    for relative, contents in (files or {}).items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(contents, bytes):
            path.write_bytes(contents)
        else:
            path.write_text(contents, encoding="utf-8")
    return root


@pytest.fixture()
def store(tmp_path: Path) -> Path:
    path = tmp_path / "templates"
    path.mkdir()
    return path


@pytest.fixture()
def make_template(store: Path) -> TemplateFactory:
    """Create a template directory inside ``store``."""

    def factory(
        directory: str,
        *,
        name: str | None = None,
        alias: list[str] | None = None,
        commands: list[str] | None = None,
        ignore: list[str] | None = None,
        files: Mapping[str, str | bytes] | None = None,
    ) -> Path:
        def toml_list(values: list[str] | None) -> str:
            return "[" + ", ".join(f"'{value}'" for value in values or []) + "]"

        metadata = (
            "[template]\n"
            f"name = '{name or directory}'\n"
            "description = 'Test template'\n"
            f"alias = {toml_list(alias)}\n"
            f"commands = {toml_list(commands)}\n"
            f"ignore = {toml_list(ignore)}\n"
        )
        return write_template(store, directory, metadata, files)

    return factory
