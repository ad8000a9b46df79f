"""Discovery of installed templates."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Iterator, Optional

from pydantic import ValidationError

from .defaults import install_defaults
from .errors import InvalidTemplate, IOFailure, TemplateNotFound
from .schema import METADATA_FILENAME, Template, TemplateMetadata

__all__ = ["TemplateRegistry", "load_template"]


LOGGER = logging.getLogger(__name__)


def load_template(directory: Path) -> Template:
    """Parse the descriptor inside ``directory``.

    Raises :class:`InvalidTemplate` when the descriptor is missing, unreadable,
    not TOML, has no ``[template]`` table or fails validation.
    """

    metadata_path = directory / METADATA_FILENAME
    try:
        document = tomllib.loads(metadata_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise InvalidTemplate(f"missing {METADATA_FILENAME}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise InvalidTemplate(f"cannot read {metadata_path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise InvalidTemplate(f"invalid TOML in {metadata_path}: {exc}") from exc

    table = document.get("template")
    if not isinstance(table, dict):
        raise InvalidTemplate(f"{metadata_path} has no [template] table")

    try:
        metadata = TemplateMetadata.model_validate(table)
    except ValidationError as exc:
        raise InvalidTemplate(f"invalid metadata in {metadata_path}: {exc}") from exc

    return Template.from_metadata(metadata, directory)


class TemplateRegistry:
    """Lazily loaded, read-only view of a template store.

    The store is scanned once, on the first call to :meth:`ensure_loaded` or
    any lookup, and the result is kept for the lifetime of the registry.
    """

    def __init__(self, root: Path | str, *, install_defaults: bool = False) -> None:
        self._root = Path(root)
        self._install_defaults = install_defaults
        self._templates: Optional[tuple[Template, ...]] = None

    @property
    def root(self) -> Path:
        """Directory scanned for templates."""

        return self._root

    @property
    def loaded(self) -> bool:
        return self._templates is not None

    def ensure_loaded(self) -> None:
        """Scan the store unless it has already been scanned."""

        if self._templates is not None:
            return

        if not self._root.exists() and self._install_defaults:
            LOGGER.info("Creating template store %s", self._root)
            try:
                self._root.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise IOFailure(self._root, exc) from exc
            install_defaults(self._root)

        self._templates = tuple(self._scan())

    def _scan(self) -> list[Template]:
        if not self._root.is_dir():
            LOGGER.debug("Template store %s does not exist", self._root)
            return []

        try:
            entries = sorted(self._root.iterdir())
        except OSError as exc:
            raise IOFailure(self._root, exc) from exc

        by_name: dict[str, Template] = {}
        for entry in entries:
            if not entry.is_dir():
                continue
            try:
                template = load_template(entry)
            except InvalidTemplate as exc:
                LOGGER.warning("Skipping template %s: %s", entry, exc)
                continue
            if template.name in by_name:
                LOGGER.warning(
                    "Template name %r in %s shadows %s",
                    template.name,
                    entry,
                    by_name[template.name].root_path,
                )
            by_name[template.name] = template
        return list(by_name.values())

    def list_templates(self) -> tuple[Template, ...]:
        """Return every valid template in the store."""

        self.ensure_loaded()
        assert self._templates is not None
        return self._templates

    def find(self, query: str) -> Optional[Template]:
        """Return the template whose name or alias matches ``query``, ignoring case."""

        for template in self.list_templates():
            if template.matches(query):
                return template
        return None

    def get(self, query: str) -> Template:
        """Like :meth:`find` but raise :class:`TemplateNotFound` when nothing matches."""

        template = self.find(query)
        if template is None:
            raise TemplateNotFound(query.lower())
        return template

    def __iter__(self) -> Iterator[Template]:
        return iter(self.list_templates())

    def __len__(self) -> int:
        return len(self.list_templates())
