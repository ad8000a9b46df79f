"""Initialize new projects from reusable file-tree templates.

Templates live in a template store, one directory per template holding a
``.meta.toml`` descriptor next to the files that make up the scaffold. The
package exposes the registry used to discover templates, the ``$variable``
substitution engine, and the applier that copies a template into a project
directory and runs its post-copy commands.
"""

from __future__ import annotations

__version__ = "1.0.0"

from .applier import ApplyResult, TemplateApplier, apply
from .config import ProjectVariables, template_dir
from .create import create_template
from .defaults import install_defaults
from .errors import (
    CommandFailure,
    DestinationNotEmpty,
    InitxError,
    IOFailure,
    TemplateExists,
    TemplateNotFound,
)
from .registry import TemplateRegistry
from .schema import Template, TemplateMetadata
from .substitution import substitute

__all__ = [
    "ApplyResult",
    "CommandFailure",
    "DestinationNotEmpty",
    "IOFailure",
    "InitxError",
    "ProjectVariables",
    "Template",
    "TemplateApplier",
    "TemplateExists",
    "TemplateMetadata",
    "TemplateNotFound",
    "TemplateRegistry",
    "apply",
    "create_template",
    "install_defaults",
    "substitute",
    "template_dir",
]
