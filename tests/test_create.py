from __future__ import annotations

import tomllib
from pathlib import Path

import pytest

from initx.create import create_template
from initx.errors import TemplateExists
from initx.registry import TemplateRegistry


def test_create_template_writes_skeleton(store: Path):
    path = create_template(store, "Rust")

    assert path == store / "rust"
    assert sorted(item.name for item in path.iterdir()) == [".envrc", ".meta.toml", "devenv.nix"]
    metadata = tomllib.loads((path / ".meta.toml").read_text(encoding="utf-8"))
    assert metadata["template"] == {
        "name": "Rust",
        "description": "New template",
        "alias": [],
        "commands": [],
        "ignore": [],
    }
    assert 'env.GREET = "Rust";' in (path / "devenv.nix").read_text(encoding="utf-8")


def test_created_template_is_discoverable(store: Path):
    create_template(store, "Elixir")

    template = TemplateRegistry(store).get("elixir")
    assert template.description == "New template"


def test_create_template_refuses_existing(store: Path):
    create_template(store, "Rust")
    with pytest.raises(TemplateExists):
        create_template(store, "rust")


def test_create_template_force_replaces_existing(store: Path):
    path = create_template(store, "Rust")
    (path / "extra.txt").write_text("stale", encoding="utf-8")

    create_template(store, "Rust", force=True)

    assert not (path / "extra.txt").exists()
    assert (path / ".meta.toml").is_file()


def test_create_template_rejects_empty_name(store: Path):
    with pytest.raises(ValueError):
        create_template(store, "  ")


def test_name_is_escaped_in_metadata(store: Path):
    path = create_template(store, 'Say "hi"')
    metadata = tomllib.loads((path / ".meta.toml").read_text(encoding="utf-8"))
    assert metadata["template"]["name"] == 'Say "hi"'


@pytest.mark.parametrize("name", ["two\nlines", "tab\there", "bell\x07"])
def test_create_template_rejects_control_characters(store: Path, name: str):
    with pytest.raises(ValueError):
        create_template(store, name)

    assert list(store.iterdir()) == []
