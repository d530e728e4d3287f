"""Protocols for the collaborators the workspace stores depend on."""

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from braindown.models.document import Document
from braindown.models.vault import FileEntry, WorkspaceConfig


@runtime_checkable
class AccessibilityChecker(Protocol):
    """Protocol for vault directory probes."""

    async def check_accessible(self, path: str) -> bool:
        """Return True iff path exists, is a directory, and is readable."""
        ...


@runtime_checkable
class FileLister(Protocol):
    """Protocol for listing the documents of a vault."""

    async def list_files(self, path: str) -> list[FileEntry]:
        """List document files in a vault directory, newest first."""
        ...


@runtime_checkable
class ConfigStorage(Protocol):
    """Protocol for durable storage of the workspace configuration."""

    async def load_config(self) -> WorkspaceConfig:
        """Load the configuration; an absent config is an empty one."""
        ...

    async def persist_config(self, config: WorkspaceConfig) -> None:
        """Replace the stored configuration with config."""
        ...


@runtime_checkable
class DocumentStorage(Protocol):
    """Protocol for reading and writing document files."""

    async def read_document(self, path: str) -> Document:
        """Read and parse a document file."""
        ...

    async def write_document(self, path: str, document: Document) -> None:
        """Write the full document to path."""
        ...

    async def create_document(self, vault_path: str, name: str) -> str:
        """Create an empty document in a vault and return its path."""
        ...

    async def delete_document(self, path: str) -> None:
        """Delete a document file."""
        ...

    async def rename_document(self, old_path: str, new_name: str) -> str:
        """Rename a document file and return its new path."""
        ...


@runtime_checkable
class DirectoryPicker(Protocol):
    """Protocol for the interactive directory chooser."""

    async def pick_directory(self) -> str | None:
        """Return the chosen directory, or None if the user cancelled."""
        ...


@runtime_checkable
class Confirmer(Protocol):
    """Protocol for interactive yes/no prompts."""

    async def confirm(self, message: str, title: str = "Confirm") -> bool:
        """Return True if the user confirmed."""
        ...


@runtime_checkable
class Cancellable(Protocol):
    """Protocol for a pending timer handle."""

    def cancel(self) -> None:
        """Stop the callback from running; harmless once it has run."""
        ...


@runtime_checkable
class Scheduler(Protocol):
    """Protocol for fire-once delayed callbacks."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable:
        """Run callback after delay seconds; the returned handle cancels it."""
        ...
