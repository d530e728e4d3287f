"""Read, write, create, delete and rename .mschema document files."""

import asyncio
import json
from pathlib import Path

from loguru import logger

from braindown.config import DOCUMENT_SUFFIX
from braindown.errors import DocumentShapeError
from braindown.models.document import Document, new_document


def sanitize_filename(name: str) -> str:
    """Keep letters, digits, spaces, hyphens, underscores and dots; trim the rest."""
    return "".join(c for c in name if c.isalnum() or c in " -_.").strip()


def _document_path(directory: Path, name: str) -> Path:
    safe_name = sanitize_filename(name)
    if not safe_name:
        msg = f"Invalid document name: {name!r}"
        raise ValueError(msg)
    return directory / (safe_name + DOCUMENT_SUFFIX)


def read_document(path: str) -> Document:
    """Read and parse a document file.

    Raises:
        FileNotFoundError: If the file does not exist.
        DocumentShapeError: If the contents are not a valid document.
    """
    raw = Path(path).read_bytes()
    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        msg = f"Document {path!r} is not valid JSON: {e}"
        raise DocumentShapeError(msg) from e
    if not isinstance(data, dict):
        msg = f"Document {path!r} must hold a JSON object"
        raise DocumentShapeError(msg)
    return Document.from_dict(data)


def write_document(path: str, document: Document) -> None:
    """Write the full document, creating the parent directory if needed."""
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(json.dumps(document.to_dict(), indent=2), encoding="utf-8")
    logger.debug("Wrote document {!r} to {}", document.meta.name, path)


def create_document(vault_path: str, name: str) -> str:
    """Create an empty document in a vault and return its path.

    Raises:
        NotADirectoryError: If vault_path is not a directory.
        FileExistsError: If a document with that name already exists.
    """
    vault = Path(vault_path)
    if not vault.is_dir():
        msg = f"Invalid vault path: {vault_path!r}"
        raise NotADirectoryError(msg)

    file_path = _document_path(vault, name)
    document = new_document(name)
    with open(file_path, "x", encoding="utf-8") as f:
        f.write(json.dumps(document.to_dict(), indent=2))
    logger.info("Created document {}", file_path)
    return str(file_path)


def delete_document(path: str) -> None:
    """Delete a document file. Only .mschema files may be deleted."""
    file_path = Path(path)
    if file_path.suffix != DOCUMENT_SUFFIX:
        msg = f"Can only delete {DOCUMENT_SUFFIX} files: {path!r}"
        raise ValueError(msg)
    file_path.unlink()
    logger.info("Deleted document {}", path)


def rename_document(old_path: str, new_name: str) -> str:
    """Rename a document within its directory and return the new path.

    Raises:
        FileNotFoundError: If old_path does not exist.
        FileExistsError: If the target name is taken.
    """
    old_file = Path(old_path)
    if not old_file.exists():
        msg = f"File does not exist: {old_path!r}"
        raise FileNotFoundError(msg)

    new_file = _document_path(old_file.parent, new_name)
    if new_file.exists():
        msg = f"A file with that name already exists: {new_file.name!r}"
        raise FileExistsError(msg)

    old_file.rename(new_file)
    logger.info("Renamed document {} to {}", old_path, new_file)
    return str(new_file)


class DocumentFiles:
    """DocumentStorage over the local filesystem."""

    async def read_document(self, path: str) -> Document:
        return await asyncio.to_thread(read_document, path)

    async def write_document(self, path: str, document: Document) -> None:
        await asyncio.to_thread(write_document, path, document)

    async def create_document(self, vault_path: str, name: str) -> str:
        return await asyncio.to_thread(create_document, vault_path, name)

    async def delete_document(self, path: str) -> None:
        await asyncio.to_thread(delete_document, path)

    async def rename_document(self, old_path: str, new_name: str) -> str:
        return await asyncio.to_thread(rename_document, old_path, new_name)
