"""Vault configuration store: the ordered vault list, the active vault and its files."""

import asyncio
from dataclasses import dataclass, field, replace

from loguru import logger

from braindown.config import MAX_RECENT_FILES
from braindown.core.store import Store
from braindown.core.vault.activation import ActivationResult, VaultActivationResolver
from braindown.core.vault.validation import is_path_duplicate, validate_vault_name
from braindown.errors import (
    AllVaultsInaccessibleError,
    DuplicateNameError,
    DuplicatePathError,
    InaccessibleError,
    NotFoundError,
    PersistenceError,
    ValidationError,
    WorkspaceError,
)
from braindown.ids import generate_id
from braindown.models.vault import FileEntry, VaultEntry, WorkspaceConfig
from braindown.protocols import ConfigStorage


@dataclass(frozen=True)
class VaultState:
    config: WorkspaceConfig = field(default_factory=WorkspaceConfig)
    active_vault_id: str | None = None
    files: tuple[FileEntry, ...] = ()
    recent_files: tuple[str, ...] = ()
    activation: ActivationResult | None = None
    is_loading: bool = False
    error: str | None = None

    @property
    def vaults(self) -> tuple[VaultEntry, ...]:
        return self.config.vaults

    @property
    def active_vault(self) -> VaultEntry | None:
        if self.active_vault_id is None:
            return None
        return self.config.find(self.active_vault_id)

    @property
    def default_vault(self) -> VaultEntry | None:
        return self.config.vaults[0] if self.config.vaults else None

    @property
    def has_vaults(self) -> bool:
        return bool(self.config.vaults)


class VaultConfigStore(Store[VaultState]):
    """Owns the workspace configuration and mirrors it to persistent storage.

    Every mutation validates first, persists the full new list, and only
    then publishes the new snapshot, so a failed persist leaves both the
    stored and the in-memory list unchanged. Mutations are serialized by a
    lock; operations that await a collaborator re-read the current list
    afterwards and fail with NotFoundError if their target vanished.
    """

    def __init__(self, storage: ConfigStorage, resolver: VaultActivationResolver) -> None:
        super().__init__(VaultState())
        self._storage = storage
        self._resolver = resolver
        self._lock = asyncio.Lock()

    # --- Loading and activation ---

    async def load(self) -> None:
        """Load the persisted configuration. A failed load leaves an empty list."""
        self._publish(replace(self._state, is_loading=True, error=None))
        try:
            config = await self._storage.load_config()
        except PersistenceError as e:
            logger.error("Failed to load workspace config: {}", e)
            self._publish(
                replace(self._state, config=WorkspaceConfig(), is_loading=False, error=str(e))
            )
            return
        except Exception as e:
            self._publish(replace(self._state, is_loading=False, error=str(e)))
            raise
        logger.debug("Loaded {} vault(s) from config", len(config.vaults))
        self._publish(replace(self._state, config=config, is_loading=False))

    async def initialize(self) -> ActivationResult | None:
        """Load the configuration and activate the first accessible vault."""
        await self.load()
        return await self._activate_first()

    async def _activate_first(self) -> ActivationResult | None:
        vaults = self._state.config.vaults
        self._publish(replace(self._state, is_loading=True))
        try:
            result = await self._resolver.resolve(vaults)
        except AllVaultsInaccessibleError as e:
            logger.error("{}", e)
            self._publish(
                replace(
                    self._state,
                    active_vault_id=None,
                    files=(),
                    activation=None,
                    is_loading=False,
                    error=str(e),
                )
            )
            return None
        except Exception as e:
            self._publish(replace(self._state, is_loading=False, error=str(e)))
            raise

        if result.vault is not None and self._state.config.find(result.vault.id) is None:
            logger.debug("Vault {!r} removed during activation, resolving again", result.vault.name)
            return await self._activate_first()

        error = None
        if result.vault is not None and result.files is None:
            error = f"Could not list files of vault {result.vault.name!r}"
        self._publish(
            replace(
                self._state,
                active_vault_id=result.vault.id if result.vault else None,
                files=result.files or (),
                activation=result,
                is_loading=False,
                error=error,
            )
        )
        return result

    async def activate_vault(self, vault_id: str) -> None:
        """Make a specific vault active and list its files.

        Raises:
            NotFoundError: If vault_id is not configured.
            InaccessibleError: If its directory is not accessible.
        """
        vault = self._require(vault_id)
        if not await self._resolver.is_accessible(vault.path):
            raise self._fail(InaccessibleError(vault.path))

        files = await self._resolver.list_files(vault)
        vault = self._require(vault_id)
        index = self._state.config.index_of(vault_id)
        logger.info("Switched to vault {!r}", vault.name)
        self._publish(
            replace(
                self._state,
                active_vault_id=vault_id,
                files=files or (),
                activation=ActivationResult(
                    status="activated", vault=vault, index=index, files=files
                ),
                error=None if files is not None else f"Could not list files of vault {vault.name!r}",
            )
        )

    async def refresh_files(self) -> None:
        """Re-list the active vault's files. No-op without an active vault."""
        vault = self._state.active_vault
        if vault is None:
            return
        files = await self._resolver.list_files(vault)
        if self._state.active_vault_id != vault.id:
            logger.debug("Active vault changed during refresh, dropping stale listing")
            return
        if files is None:
            self._publish(
                replace(self._state, files=(), error=f"Could not list files of vault {vault.name!r}")
            )
            return
        self._publish(replace(self._state, files=files))

    # --- CRUD ---

    async def add_vault(self, name: str, path: str) -> VaultEntry:
        """Append a new vault to the end of the list.

        Raises:
            ValidationError: If the name breaks a naming rule.
            DuplicateNameError: If another vault has the same name.
            DuplicatePathError: If another vault uses the same directory.
            PersistenceError: If the configuration could not be saved.
        """
        async with self._lock:
            vaults = self._state.config.vaults
            self._check_name(name, vaults)
            if is_path_duplicate(path, vaults):
                msg = f"A vault already uses this directory: {path!r}"
                raise DuplicatePathError(msg)

            entry = VaultEntry(id=generate_id(), name=name, path=path)
            await self._commit(WorkspaceConfig(vaults=(*vaults, entry)))
            logger.info("Added vault {!r} at {}", name, path)

        if self._state.active_vault_id is None:
            await self._activate_first()
        return entry

    async def rename_vault(self, vault_id: str, new_name: str) -> None:
        """Change a vault's name in place.

        Raises:
            NotFoundError: If vault_id is not configured.
            ValidationError: If the name breaks a naming rule.
            DuplicateNameError: If another vault has the same name.
        """
        async with self._lock:
            vault = self._require(vault_id)
            vaults = self._state.config.vaults
            self._check_name(new_name, vaults, exclude_id=vault_id)

            renamed = replace(vault, name=new_name)
            await self._commit(
                WorkspaceConfig(vaults=tuple(renamed if v.id == vault_id else v for v in vaults))
            )
            logger.info("Renamed vault {!r} to {!r}", vault.name, new_name)

    async def update_vault_path(self, vault_id: str, new_path: str) -> None:
        """Point a vault at a different directory.

        Raises:
            NotFoundError: If vault_id is not configured, also when it is
                deleted while the accessibility check is running.
            DuplicatePathError: If another vault uses new_path.
            InaccessibleError: If new_path is not an accessible directory.
        """
        self._require(vault_id)
        self._check_path(new_path, vault_id)
        if not await self._resolver.is_accessible(new_path):
            raise self._fail(InaccessibleError(new_path))

        async with self._lock:
            vault = self._require(vault_id)
            self._check_path(new_path, vault_id)
            moved = replace(vault, path=new_path)
            await self._commit(
                WorkspaceConfig(
                    vaults=tuple(moved if v.id == vault_id else v for v in self._state.config.vaults)
                )
            )
            logger.info("Vault {!r} now points at {}", vault.name, new_path)

        if self._state.active_vault_id == vault_id:
            await self.refresh_files()

    async def delete_vault(self, vault_id: str) -> None:
        """Remove a vault from the list. Files on disk are not touched.

        If the vault was active, activation is resolved again over the
        remaining vaults.

        Raises:
            NotFoundError: If vault_id is not configured.
        """
        async with self._lock:
            vault = self._require(vault_id)
            remaining = tuple(v for v in self._state.config.vaults if v.id != vault_id)
            was_active = self._state.active_vault_id == vault_id
            if was_active:
                await self._commit(
                    WorkspaceConfig(vaults=remaining), active_vault_id=None, files=(), activation=None
                )
            else:
                await self._commit(WorkspaceConfig(vaults=remaining))
            logger.info("Deleted vault {!r}", vault.name)

        if was_active:
            await self._activate_first()

    async def move_vault_up(self, vault_id: str) -> None:
        """Swap a vault with its predecessor. No-op for the first or an unknown vault."""
        await self._move(vault_id, -1)

    async def move_vault_down(self, vault_id: str) -> None:
        """Swap a vault with its successor. No-op for the last or an unknown vault."""
        await self._move(vault_id, 1)

    async def _move(self, vault_id: str, offset: int) -> None:
        async with self._lock:
            vaults = list(self._state.config.vaults)
            index = self._state.config.index_of(vault_id)
            if index is None or not 0 <= index + offset < len(vaults):
                logger.debug("Ignoring move of vault {} by {}", vault_id, offset)
                return
            other = index + offset
            vaults[index], vaults[other] = vaults[other], vaults[index]
            await self._commit(WorkspaceConfig(vaults=tuple(vaults)))

    # --- Recent files and errors ---

    def add_recent_file(self, path: str) -> None:
        """Put path at the front of the recent files, keeping at most MAX_RECENT_FILES."""
        others = tuple(p for p in self._state.recent_files if p != path)
        self._publish(
            replace(self._state, recent_files=(path, *others)[:MAX_RECENT_FILES])
        )

    def clear_error(self) -> None:
        self._publish(replace(self._state, error=None))

    # --- Helpers ---

    async def _commit(self, config: WorkspaceConfig, **changes: object) -> None:
        """Persist config, then publish it. Nothing is published if persisting fails."""
        try:
            await self._storage.persist_config(config)
        except OSError as e:
            msg = f"Failed to save workspace config: {e}"
            raise self._fail(PersistenceError(msg)) from e
        except PersistenceError as e:
            self._fail(e)
            raise
        self._publish(replace(self._state, config=config, error=None, **changes))

    def _require(self, vault_id: str) -> VaultEntry:
        vault = self._state.config.find(vault_id)
        if vault is None:
            msg = f"Vault not found: {vault_id!r}"
            raise self._fail(NotFoundError(msg))
        return vault

    def _check_path(self, path: str, exclude_id: str) -> None:
        if is_path_duplicate(path, self._state.config.vaults, exclude_id=exclude_id):
            msg = f"A vault already uses this directory: {path!r}"
            raise DuplicatePathError(msg)

    @staticmethod
    def _check_name(
        name: str, vaults: tuple[VaultEntry, ...], exclude_id: str | None = None
    ) -> None:
        result = validate_vault_name(name, vaults, exclude_id)
        if result.valid:
            return
        if result.duplicate:
            raise DuplicateNameError(result.error)
        raise ValidationError(result.error)

    def _fail(self, error: WorkspaceError) -> WorkspaceError:
        """Record error in the state so observers can show it; return it for raising."""
        self._publish(replace(self._state, error=str(error)))
        return error
