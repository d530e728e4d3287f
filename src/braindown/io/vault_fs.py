"""Filesystem probes for vault directories."""

import asyncio
import os
from datetime import UTC, datetime
from pathlib import Path

from braindown.config import DOCUMENT_SUFFIX
from braindown.models.vault import FileEntry


def check_vault_accessible(path: str) -> bool:
    """Return True iff path exists, is a directory, and can be listed."""
    vault = Path(path)
    if not vault.is_dir():
        return False
    try:
        with os.scandir(vault):
            pass
    except OSError:
        return False
    return True


def list_vault_files(path: str) -> list[FileEntry]:
    """List the document files of a vault, newest first.

    Raises:
        FileNotFoundError: If path does not exist.
        NotADirectoryError: If path is not a directory.
    """
    vault = Path(path)
    if not vault.exists():
        msg = f"Vault path does not exist: {path!r}"
        raise FileNotFoundError(msg)
    if not vault.is_dir():
        msg = f"Vault path is not a directory: {path!r}"
        raise NotADirectoryError(msg)

    files: list[FileEntry] = []
    for entry in vault.iterdir():
        if entry.suffix != DOCUMENT_SUFFIX or not entry.is_file():
            continue
        modified = datetime.fromtimestamp(entry.stat().st_mtime, tz=UTC)
        files.append(FileEntry(name=entry.stem, path=str(entry), modified_at=modified.isoformat()))

    files.sort(key=lambda f: f.modified_at, reverse=True)
    return files


class VaultFilesystem:
    """AccessibilityChecker and FileLister over the local filesystem."""

    async def check_accessible(self, path: str) -> bool:
        return await asyncio.to_thread(check_vault_accessible, path)

    async def list_files(self, path: str) -> list[FileEntry]:
        return await asyncio.to_thread(list_vault_files, path)
