"""Template descriptors read from the template store."""

from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field

METADATA_PREFIX = ".meta"
METADATA_FILENAME = f"{METADATA_PREFIX}.toml"


class TemplateMetadata(BaseModel):
    """The ``[template]`` table of a ``.meta.toml`` descriptor."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = Field(..., min_length=1, description="Display name of the template.")
    description: str = Field("", description="One line summary shown by ``initx list``.")
    alias: List[str] = Field(default_factory=list, description="Alternative names accepted on the command line.")
    commands: List[str] = Field(default_factory=list, description="Commands run in the destination after copying files.")
    ignore: List[str] = Field(default_factory=list, description="Entries merged into the destination .gitignore.")


class Template(BaseModel):
    """An installed template: parsed metadata plus the payload directory."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., description="Unique template name within a registry.")
    description: str = Field("", description="One line summary.")
    aliases: Tuple[str, ...] = Field(default=(), description="Alternative names, in declaration order.")
    commands: Tuple[str, ...] = Field(default=(), description="Post-copy commands, in declaration order.")
    ignore: Tuple[str, ...] = Field(default=(), description="Entries merged into the destination .gitignore.")
    root_path: Path = Field(..., description="Directory holding the metadata file and payload.")

    @classmethod
    def from_metadata(cls, metadata: TemplateMetadata, root_path: Path) -> "Template":
        return cls(
            name=metadata.name,
            description=metadata.description,
            aliases=tuple(metadata.alias),
            commands=tuple(metadata.commands),
            ignore=tuple(metadata.ignore),
            root_path=root_path,
        )

    def matches(self, query: str) -> bool:
        """Return ``True`` when ``query`` names this template or one of its aliases."""

        needle = query.lower()
        if self.name.lower() == needle:
            return True
        return any(alias.lower() == needle for alias in self.aliases)


__all__ = [
    "METADATA_FILENAME",
    "METADATA_PREFIX",
    "Template",
    "TemplateMetadata",
]
