"""Configuration helpers shared by the registry, the applier and the CLI."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

TEMPLATE_DIR_ENV = "INITX_TEMPLATE_DIR"


def template_dir(env: Mapping[str, str] | None = None) -> Path:
    """Return the directory holding installed templates.

    ``INITX_TEMPLATE_DIR`` takes precedence. Otherwise templates live in
    ``$HOME/.config/templates``.
    """

    env = os.environ if env is None else env
    override = env.get(TEMPLATE_DIR_ENV, "").strip()
    if override:
        return Path(override).expanduser()

    home = env.get("HOME")
    base = Path(home) if home else Path.home()
    return base / ".config" / "templates"


@dataclass(slots=True, frozen=True)
class ProjectVariables:
    """Values substituted into a template for one invocation.

    Attributes
    ----------
    name:
        The project name chosen by the user, with whitespace runs collapsed.
    location:
        Absolute path of the directory the template is applied to.
    """

    name: str
    location: Path

    @classmethod
    def from_name(cls, name: str, location: str | Path) -> "ProjectVariables":
        """Validate ``name`` and resolve ``location`` to an absolute path."""

        normalized_name = " ".join(name.split())
        if not normalized_name:
            raise ValueError("Name cannot be empty")

        return cls(name=normalized_name, location=Path(location).expanduser().resolve())

    def context(self) -> dict[str, str]:
        """Return the variable mapping understood by :func:`initx.substitution.substitute`."""

        return {
            "location": str(self.location),
            "name": self.name,
        }


__all__ = ["ProjectVariables", "TEMPLATE_DIR_ENV", "template_dir"]
