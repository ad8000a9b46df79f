"""Authoring helpers for new templates."""

from __future__ import annotations

import logging
import shutil
import unicodedata
from pathlib import Path

from .errors import IOFailure, TemplateExists
from .schema import METADATA_FILENAME

__all__ = ["create_template", "skeleton_files"]


LOGGER = logging.getLogger(__name__)


METADATA_TEMPLATE = """[template]
name = "{name}"
description = "New template"
alias = []      # Alias' for initx
commands = []   # Commands to run after copying files (probably do git)
ignore = []     # Files to add to .gitignore (will create if needed)
"""

ENVRC_TEMPLATE = """export DIRENV_WARN_TIMEOUT=20s
eval "$(devenv direnvrc)"
use devenv
"""

DEVENV_TEMPLATE = """{{
pkgs,
lib,
config,
inputs,
...
}}:

{{
env.GREET = "{name}";
packages = [
pkgs.git
];

enterShell = ''
git --version
'';

}}
"""


def _toml_string(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def skeleton_files(name: str) -> dict[str, str]:
    """Return the files written for a freshly created template called ``name``."""

    return {
        METADATA_FILENAME: METADATA_TEMPLATE.format(name=_toml_string(name)),
        ".envrc": ENVRC_TEMPLATE,
        "devenv.nix": DEVENV_TEMPLATE.format(name=_toml_string(name)),
    }


def create_template(root: str | Path, name: str, *, force: bool = False) -> Path:
    """Create an empty template called ``name`` inside the store at ``root``.

    The template directory is the lower-cased name. An existing directory is
    replaced only when ``force`` is set.
    """

    normalized_name = name.strip()
    if not normalized_name:
        raise ValueError("Name cannot be empty")
    if any(unicodedata.category(char) == "Cc" for char in normalized_name):
        raise ValueError("Name cannot contain control characters")

    path = Path(root) / normalized_name.lower()
    if force and path.is_dir():
        LOGGER.info("Removing existing template %s", path)
        try:
            shutil.rmtree(path)
        except OSError as exc:
            raise IOFailure(path, exc) from exc

    if path.exists():
        raise TemplateExists(path)

    try:
        path.mkdir(parents=True)
        for filename, contents in skeleton_files(normalized_name).items():
            LOGGER.debug("Writing %s", path / filename)
            (path / filename).write_text(contents, encoding="utf-8")
    except OSError as exc:
        raise IOFailure(path, exc) from exc

    return path
