"""Pick the active vault: the first configured vault that is reachable."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from loguru import logger

from braindown.errors import AllVaultsInaccessibleError
from braindown.models.vault import FileEntry, VaultEntry
from braindown.protocols import AccessibilityChecker, FileLister


@dataclass(frozen=True)
class ActivationResult:
    """Outcome of resolving the active vault.

    files is None when the activated vault could not be listed.
    """

    status: Literal["activated", "no-vaults"]
    vault: VaultEntry | None = None
    index: int | None = None
    files: tuple[FileEntry, ...] | None = ()

    @property
    def fallback_used(self) -> bool:
        return self.index is not None and self.index > 0

    @property
    def fallback_vault_name(self) -> str | None:
        return self.vault.name if self.fallback_used and self.vault else None


NO_VAULTS = ActivationResult(status="no-vaults")


class VaultActivationResolver:
    """Probe vaults strictly in order and activate the first accessible one.

    Probing is sequential and stops at the first success so that "first
    configured vault wins" does not depend on timing.
    """

    def __init__(self, checker: AccessibilityChecker, lister: FileLister) -> None:
        self._checker = checker
        self._lister = lister

    async def resolve(self, vaults: Sequence[VaultEntry]) -> ActivationResult:
        """Activate the first accessible vault and list its files.

        Returns:
            NO_VAULTS for an empty list, otherwise the activated vault.

        Raises:
            AllVaultsInaccessibleError: If no vault passes the check.
        """
        if not vaults:
            logger.debug("No vaults configured")
            return NO_VAULTS

        for index, vault in enumerate(vaults):
            if not await self.is_accessible(vault.path):
                logger.warning("Vault {!r} is not accessible: {}", vault.name, vault.path)
                continue

            if index == 0:
                logger.info("Activated default vault {!r}", vault.name)
            else:
                logger.info("Default vault unavailable, falling back to {!r}", vault.name)
            files = await self.list_files(vault)
            return ActivationResult(status="activated", vault=vault, index=index, files=files)

        raise AllVaultsInaccessibleError([v.path for v in vaults])

    async def is_accessible(self, path: str) -> bool:
        """Run the accessibility check; a check that raises counts as inaccessible."""
        try:
            return await self._checker.check_accessible(path)
        except Exception:
            logger.opt(exception=True).warning("Accessibility check failed for {}", path)
            return False

    async def list_files(self, vault: VaultEntry) -> tuple[FileEntry, ...] | None:
        """List a vault's documents, or None if the listing failed."""
        try:
            return tuple(await self._lister.list_files(vault.path))
        except Exception:
            logger.opt(exception=True).warning("Could not list files of vault {!r}", vault.name)
            return None
