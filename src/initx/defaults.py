"""Default templates shipped with initx."""

from __future__ import annotations

import logging
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path, PurePosixPath
from typing import Iterator

from .errors import IOFailure

__all__ = ["BUNDLED_PACKAGE", "bundled_files", "install_defaults"]


LOGGER = logging.getLogger(__name__)

BUNDLED_PACKAGE = "initx"
BUNDLED_DIRECTORY = "bundled"


def _walk(node: Traversable, prefix: PurePosixPath) -> Iterator[tuple[PurePosixPath, Traversable]]:
    for child in sorted(node.iterdir(), key=lambda item: item.name):
        relative = prefix / child.name
        if child.is_dir():
            if child.name == "__pycache__":
                continue
            yield relative, child
            yield from _walk(child, relative)
        else:
            yield relative, child


def bundled_files() -> list[tuple[PurePosixPath, Traversable]]:
    """Return ``(relative path, resource)`` pairs for the bundled template tree."""

    root = resources.files(BUNDLED_PACKAGE).joinpath(BUNDLED_DIRECTORY)
    return list(_walk(root, PurePosixPath()))


def install_defaults(target_dir: str | Path) -> list[Path]:
    """Copy the bundled templates into ``target_dir``, overwriting existing files.

    Returns the paths that were written, directories included.
    """

    target = Path(target_dir)
    written: list[Path] = []
    for relative, resource in bundled_files():
        destination = target.joinpath(*relative.parts)
        try:
            if resource.is_dir():
                LOGGER.info("Creating dir %s", destination)
                destination.mkdir(parents=True, exist_ok=True)
            else:
                LOGGER.info("Writing file %s", destination)
                destination.parent.mkdir(parents=True, exist_ok=True)
                destination.write_bytes(resource.read_bytes())
        except OSError as exc:
            raise IOFailure(destination, exc) from exc
        written.append(destination)
    return written
