"""Composition root: wires the stores to their collaborators."""

from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from braindown.core.notify.queue import NotificationQueue
from braindown.core.session.store import DocumentSessionStore
from braindown.core.ui.selection import SelectionStore
from braindown.core.vault.activation import ActivationResult, VaultActivationResolver
from braindown.core.vault.store import VaultConfigStore
from braindown.errors import NotFoundError
from braindown.io.config_file import ConfigFile
from braindown.io.documents import DocumentFiles
from braindown.io.vault_fs import VaultFilesystem
from braindown.models.vault import VaultEntry
from braindown.protocols import (
    AccessibilityChecker,
    ConfigStorage,
    Confirmer,
    DirectoryPicker,
    DocumentStorage,
    FileLister,
    Scheduler,
)


@dataclass
class Workspace:
    """All workspace state of one application instance.

    Built once at startup and passed to whoever needs it; there are no
    module-level stores.
    """

    vaults: VaultConfigStore
    session: DocumentSessionStore
    selection: SelectionStore
    notifications: NotificationQueue
    documents: DocumentStorage
    picker: DirectoryPicker | None = None
    confirmer: Confirmer | None = None

    @classmethod
    def create(
        cls,
        *,
        config_storage: ConfigStorage,
        checker: AccessibilityChecker,
        lister: FileLister,
        documents: DocumentStorage,
        scheduler: Scheduler | None = None,
        picker: DirectoryPicker | None = None,
        confirmer: Confirmer | None = None,
    ) -> "Workspace":
        resolver = VaultActivationResolver(checker, lister)
        return cls(
            vaults=VaultConfigStore(config_storage, resolver),
            session=DocumentSessionStore(),
            selection=SelectionStore(),
            notifications=NotificationQueue(scheduler),
            documents=documents,
            picker=picker,
            confirmer=confirmer,
        )

    @classmethod
    def from_filesystem(
        cls,
        config_path: str | Path | None = None,
        *,
        picker: DirectoryPicker | None = None,
        confirmer: Confirmer | None = None,
    ) -> "Workspace":
        """Workspace backed by the local filesystem and a JSON config file."""
        fs = VaultFilesystem()
        return cls.create(
            config_storage=ConfigFile(config_path),
            checker=fs,
            lister=fs,
            documents=DocumentFiles(),
            picker=picker,
            confirmer=confirmer,
        )

    async def start(self) -> ActivationResult | None:
        """Load the configuration and activate the first reachable vault."""
        result = await self.vaults.initialize()
        if result is not None and result.fallback_used:
            self.notifications.warning(
                f"Default vault unavailable, opened {result.fallback_vault_name!r} instead"
            )
        error = self.vaults.get_state().error
        if error:
            self.notifications.error(error, ttl_millis=0)
        return result

    async def open_document(self, path: str) -> None:
        """Read a document and make it the open one, discarding the previous session."""
        document = await self.documents.read_document(path)
        self.selection.reset()
        self.session.load_map(document, path)
        self.vaults.add_recent_file(path)
        logger.info("Opened {}", path)

    async def save_document(self) -> bool:
        """Write the open document in full. Returns False if nothing is open.

        The session is marked saved only if it still holds the written
        snapshot; edits made or documents opened during the write stay as
        they are.
        """
        state = self.session.get_state()
        if state.document is None or state.source_location is None:
            return False
        await self.documents.write_document(state.source_location, state.document)
        if self.session.get_state().document is not state.document:
            logger.info("Saved {}, session changed during the write", state.source_location)
            return True
        self.session.mark_saved()
        logger.info("Saved {}", state.source_location)
        return True

    def close_document(self) -> None:
        self.session.close_map()
        self.selection.reset()

    async def create_document(self, name: str) -> str:
        """Create an empty document in the active vault and return its path.

        Raises:
            NotFoundError: If no vault is active.
        """
        vault = self.vaults.get_state().active_vault
        if vault is None:
            msg = "No active vault to create a document in"
            raise NotFoundError(msg)
        path = await self.documents.create_document(vault.path, name)
        await self.vaults.refresh_files()
        return path

    async def delete_document(self, path: str) -> None:
        """Delete a document file, then close it if it is the open one."""
        await self.documents.delete_document(path)
        if self.session.get_state().source_location == path:
            self.close_document()
        await self.vaults.refresh_files()

    async def rename_document(self, path: str, new_name: str) -> str:
        new_path = await self.documents.rename_document(path, new_name)
        if self.session.get_state().source_location == path:
            self.session.relocate(new_path)
        await self.vaults.refresh_files()
        return new_path

    async def add_vault_from_picker(self, name: str) -> VaultEntry | None:
        """Ask the user for a directory and add it as a vault. None if cancelled."""
        if self.picker is None:
            msg = "No directory picker configured"
            raise RuntimeError(msg)
        path = await self.picker.pick_directory()
        if not path:
            return None
        return await self.vaults.add_vault(name, path)

    async def confirm_discard_changes(self) -> bool:
        """Return True if the open document may be replaced or closed.

        Asks the user only when there are unsaved changes.
        """
        if not self.session.get_state().dirty:
            return True
        if self.confirmer is None:
            return False
        return await self.confirmer.confirm(
            "You have unsaved changes. Discard them?", "Unsaved changes"
        )
