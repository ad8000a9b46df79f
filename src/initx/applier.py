"""Materialize a template into a destination directory."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Mapping

from .errors import CommandFailure, DestinationNotEmpty, IOFailure
from .schema import METADATA_PREFIX, Template
from .substitution import substitute

__all__ = [
    "ApplyResult",
    "MAX_DEPTH",
    "TemplateApplier",
    "apply",
    "ensure_empty",
    "split_command",
]


LOGGER = logging.getLogger(__name__)

MAX_DEPTH = 10
GITIGNORE = ".gitignore"


@dataclass(slots=True)
class ApplyResult:
    """Paths and commands produced by a single :meth:`TemplateApplier.apply` call."""

    destination: Path
    directories: list[Path] = field(default_factory=list)
    files: list[Path] = field(default_factory=list)
    commands: list[list[str]] = field(default_factory=list)


def ensure_empty(destination: Path) -> None:
    """Raise :class:`DestinationNotEmpty` if ``destination`` has any entry."""

    try:
        with os.scandir(destination) as entries:
            has_entries = next(entries, None) is not None
    except FileNotFoundError:
        return
    except OSError as exc:
        raise IOFailure(destination, exc) from exc
    if has_entries:
        raise DestinationNotEmpty(destination)


def split_command(command: str) -> list[str]:
    """Split ``command`` on single spaces into ``[program, *arguments]``."""

    return command.split(" ")


def _walk_template(root: Path) -> Iterator[tuple[Path, bool]]:
    """Yield ``(path, is_dir)`` for every payload entry below ``root``.

    Symbolic links are followed. Entries deeper than :data:`MAX_DEPTH` levels
    are not visited and metadata entries are pruned. A directory that cannot
    be listed raises :class:`~initx.errors.IOFailure`.
    """

    def report(error: OSError) -> None:
        raise IOFailure(Path(error.filename or root), error) from error

    for current, dirnames, filenames in os.walk(root, followlinks=True, onerror=report):
        current_path = Path(current)
        depth = len(current_path.relative_to(root).parts)
        if depth >= MAX_DEPTH:
            dirnames.clear()
            continue

        dirnames[:] = sorted(name for name in dirnames if not name.startswith(METADATA_PREFIX))
        for name in dirnames:
            yield current_path / name, True
        for name in sorted(filenames):
            if name.startswith(METADATA_PREFIX):
                continue
            yield current_path / name, False


class TemplateApplier:
    """Copy a template's payload into a project directory and run its commands."""

    def apply(
        self,
        template: Template,
        variables: Mapping[str, str],
        destination: str | Path,
        *,
        force: bool = False,
    ) -> ApplyResult:
        """Apply ``template`` to ``destination`` using ``variables``.

        Parameters
        ----------
        template:
            The template resolved from a :class:`~initx.registry.TemplateRegistry`.
        variables:
            Values substituted into text files and command strings. A copy is
            taken so later changes to the mapping have no effect.
        destination:
            Directory receiving the generated project. It is created when
            missing.
        force:
            Apply even when ``destination`` already contains entries. Existing
            files with the same relative path are overwritten.

        Nothing is rolled back on failure: files written before an
        :class:`~initx.errors.IOFailure` or :class:`~initx.errors.CommandFailure`
        stay on disk.
        """

        variables = dict(variables)
        target = Path(destination)
        if not force:
            ensure_empty(target)

        result = ApplyResult(destination=target)
        self._make_dir(target)

        root = Path(template.root_path)
        for source, is_dir in _walk_template(root):
            output = target / source.relative_to(root)
            if is_dir:
                self._make_dir(output)
                result.directories.append(output)
            else:
                self._copy_file(source, output, variables)
                result.files.append(output)

        if template.ignore:
            result.files.append(self._merge_gitignore(target, template.ignore))

        for command in template.commands:
            result.commands.append(self._run_command(command, variables, target))

        return result

    def _make_dir(self, path: Path) -> None:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise IOFailure(path, exc) from exc

    def _copy_file(self, source: Path, output: Path, variables: Mapping[str, str]) -> None:
        self._make_dir(output.parent)
        try:
            raw = source.read_bytes()
        except OSError as exc:
            raise IOFailure(source, exc) from exc

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError:
            LOGGER.debug("Copying binary file %s", output)
            payload = raw
        else:
            LOGGER.debug("Writing file %s", output)
            payload = substitute(text, variables).encode("utf-8")

        try:
            output.write_bytes(payload)
            shutil.copymode(source, output)
        except OSError as exc:
            raise IOFailure(output, exc) from exc

    def _merge_gitignore(self, target: Path, entries: tuple[str, ...]) -> Path:
        path = target / GITIGNORE
        try:
            existing = path.read_text(encoding="utf-8", errors="replace") if path.exists() else ""
        except OSError as exc:
            raise IOFailure(path, exc) from exc

        present = {line.strip() for line in existing.splitlines()}
        missing = [entry for entry in dict.fromkeys(entries) if entry.strip() not in present]
        if not missing:
            return path

        prefix = "" if not existing or existing.endswith("\n") else "\n"
        LOGGER.debug("Adding %d entries to %s", len(missing), path)
        try:
            with path.open("a", encoding="utf-8", newline="") as handle:
                handle.write(prefix + "".join(f"{entry}\n" for entry in missing))
        except OSError as exc:
            raise IOFailure(path, exc) from exc
        return path

    def _run_command(self, command: str, variables: Mapping[str, str], cwd: Path) -> list[str]:
        rendered = substitute(command, variables)
        argv = split_command(rendered)
        LOGGER.info("Running %s in %s", rendered, cwd)
        try:
            completed = subprocess.run(argv, cwd=cwd, check=False)
        except (OSError, ValueError) as exc:
            raise CommandFailure(rendered, spawn_error=exc) from exc
        if completed.returncode != 0:
            raise CommandFailure(rendered, exit_status=completed.returncode)
        return argv


def apply(
    template: Template,
    variables: Mapping[str, str],
    destination: str | Path,
    *,
    force: bool = False,
) -> ApplyResult:
    """Apply ``template`` with a default :class:`TemplateApplier`."""

    return TemplateApplier().apply(template, variables, destination, force=force)
