from __future__ import annotations

from pathlib import Path

from initx.defaults import bundled_files, install_defaults
from initx.registry import TemplateRegistry


def test_bundled_tree_contains_typescript_template():
    names = {str(relative) for relative, _ in bundled_files()}
    assert {"typescript", "typescript/.meta.toml", "typescript/devenv.nix"} <= names


def test_install_defaults_writes_bundled_files(tmp_path: Path):
    written = install_defaults(tmp_path)

    assert tmp_path / "typescript" / ".meta.toml" in written
    devenv = (tmp_path / "typescript" / "devenv.nix").read_text(encoding="utf-8")
    assert 'env.GREET = "$name";' in devenv
    assert "pkgs.nodejs" in devenv


def test_install_defaults_overwrites_changes(tmp_path: Path):
    install_defaults(tmp_path)
    devenv = tmp_path / "typescript" / "devenv.nix"
    devenv.write_text("edited", encoding="utf-8")

    install_defaults(tmp_path)

    assert devenv.read_text(encoding="utf-8") != "edited"


def test_installed_defaults_are_valid_templates(tmp_path: Path):
    install_defaults(tmp_path)

    template = TemplateRegistry(tmp_path).get("TypeScript")
    assert "ts" in template.aliases
    assert template.commands == ("git init",)
