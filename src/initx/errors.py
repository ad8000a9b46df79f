"""Custom exception types raised by the initx core."""

from __future__ import annotations

from pathlib import Path


class InitxError(RuntimeError):
    """Base class for failures surfaced to the command line front end."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class TemplateNotFound(InitxError):
    """Raised when no installed template matches a name or alias."""

    def __init__(self, query: str) -> None:
        self.query = query
        super().__init__(f"No template found for {query}")


class InvalidTemplate(InitxError):
    """Raised when a template directory has no usable descriptor."""


class TemplateExists(InitxError):
    """Raised when a new template would replace an existing one."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"{path} already exists, or is inaccessible")


class DestinationNotEmpty(InitxError):
    """Raised when applying a template into a directory that has entries."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"{path} is not empty, pass --force to apply anyway")


class IOFailure(InitxError):
    """Raised when creating, reading, writing or copying a path fails."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        reason = cause.strerror or str(cause)
        super().__init__(f"Failed to materialize {path}: {reason}")


class CommandFailure(InitxError):
    """Raised when a post-copy command cannot be spawned or exits non-zero."""

    def __init__(
        self,
        command: str,
        *,
        exit_status: int | None = None,
        spawn_error: Exception | None = None,
    ) -> None:
        self.command = command
        self.exit_status = exit_status
        self.spawn_error = spawn_error
        if spawn_error is not None:
            detail = f"could not be started: {spawn_error}"
        else:
            detail = f"exited with status {exit_status}"
        super().__init__(f"Command '{command}' {detail}")


__all__ = [
    "CommandFailure",
    "DestinationNotEmpty",
    "IOFailure",
    "InitxError",
    "InvalidTemplate",
    "TemplateExists",
    "TemplateNotFound",
]
