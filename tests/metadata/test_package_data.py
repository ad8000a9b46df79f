from __future__ import annotations

from pathlib import Path
import tomllib


REPO_ROOT = Path(__file__).resolve().parents[2]
PYPROJECT_PATH = REPO_ROOT / "pyproject.toml"
BUNDLED_PATH = REPO_ROOT / "src" / "initx" / "bundled"


def load_pyproject() -> dict:
    with PYPROJECT_PATH.open("rb") as handle:
        return tomllib.load(handle)


def test_bundled_templates_are_packaged_recursively() -> None:
    patterns = load_pyproject()["tool"]["setuptools"]["package-data"]["initx"]

    assert "bundled/**/*" in patterns
    assert "bundled/**/.*" in patterns


def test_bundled_metadata_files_exist() -> None:
    templates = [path for path in BUNDLED_PATH.iterdir() if path.is_dir()]

    assert templates
    for template in templates:
        assert (template / ".meta.toml").is_file(), f"{template} has no descriptor"
