"""Tests for reading and writing .mschema document files."""

import json
from pathlib import Path

import pytest

from braindown.errors import DocumentShapeError
from braindown.io.documents import (
    DocumentFiles,
    create_document,
    delete_document,
    read_document,
    rename_document,
    sanitize_filename,
    write_document,
)
from braindown.models.document import Document


def test_sanitize_filename() -> None:
    """Path separators and other punctuation are stripped."""
    assert sanitize_filename("  My Trip: 2026/v2 ") == "My Trip 2026v2"
    assert sanitize_filename("notes_v1.2-final") == "notes_v1.2-final"


def test_write_then_read_document(tmp_path: Path, document: Document) -> None:
    """A written document reads back equal."""
    path = str(tmp_path / "sub" / "trip.mschema")

    write_document(path, document)

    assert read_document(path) == document
    assert json.loads(Path(path).read_text())["meta"]["name"] == "Trip"


def test_read_invalid_json(tmp_path: Path) -> None:
    """Unparseable contents raise DocumentShapeError."""
    path = tmp_path / "bad.mschema"
    path.write_text("{nope")

    with pytest.raises(DocumentShapeError, match="not valid JSON"):
        read_document(str(path))


def test_read_non_object(tmp_path: Path) -> None:
    """A JSON array is not a document."""
    path = tmp_path / "bad.mschema"
    path.write_text("[]")

    with pytest.raises(DocumentShapeError, match="JSON object"):
        read_document(str(path))


def test_read_non_utf8_file(tmp_path: Path) -> None:
    """Bytes that are not UTF-8 raise DocumentShapeError."""
    path = tmp_path / "bad.mschema"
    path.write_bytes(b"\xff\xfe{\x00")

    with pytest.raises(DocumentShapeError, match="not valid JSON"):
        read_document(str(path))


def test_create_document(tmp_path: Path) -> None:
    """A new document is written as an empty map named after the file."""
    path = create_document(str(tmp_path), "Road trip!")

    assert path == str(tmp_path / "Road trip.mschema")
    document = read_document(path)
    assert document.meta.name == "Road trip!"
    assert document.nodes == ()


def test_create_document_refuses_to_overwrite(tmp_path: Path) -> None:
    """Creating a document with a taken name fails."""
    create_document(str(tmp_path), "plans")

    with pytest.raises(FileExistsError):
        create_document(str(tmp_path), "plans")


def test_create_document_in_missing_vault(tmp_path: Path) -> None:
    """The vault directory must exist."""
    with pytest.raises(NotADirectoryError, match="Invalid vault path"):
        create_document(str(tmp_path / "missing"), "plans")


def test_create_document_with_empty_name(tmp_path: Path) -> None:
    """A name with nothing left after sanitizing is rejected."""
    with pytest.raises(ValueError, match="Invalid document name"):
        create_document(str(tmp_path), "///")


def test_delete_document(tmp_path: Path) -> None:
    """Deleting removes the file."""
    path = create_document(str(tmp_path), "plans")

    delete_document(path)

    assert not Path(path).exists()


def test_delete_refuses_other_files(tmp_path: Path) -> None:
    """Only .mschema files can be deleted."""
    other = tmp_path / "keep.txt"
    other.write_text("")

    with pytest.raises(ValueError, match="Can only delete"):
        delete_document(str(other))

    assert other.exists()


def test_rename_document(tmp_path: Path) -> None:
    """Renaming keeps the file in its directory."""
    path = create_document(str(tmp_path), "plans")

    new_path = rename_document(path, "final plans")

    assert new_path == str(tmp_path / "final plans.mschema")
    assert Path(new_path).exists()
    assert not Path(path).exists()


def test_rename_to_taken_name(tmp_path: Path) -> None:
    """Renaming onto an existing document fails and keeps both files."""
    first = create_document(str(tmp_path), "plans")
    create_document(str(tmp_path), "ideas")

    with pytest.raises(FileExistsError):
        rename_document(first, "ideas")

    assert Path(first).exists()


def test_rename_missing_document(tmp_path: Path) -> None:
    """Renaming a file that does not exist fails."""
    with pytest.raises(FileNotFoundError):
        rename_document(str(tmp_path / "gone.mschema"), "other")


async def test_document_files_adapter(tmp_path: Path, document: Document) -> None:
    """The async adapter reaches the same files as the plain functions."""
    files = DocumentFiles()
    path = await files.create_document(str(tmp_path), "trip")

    await files.write_document(path, document)
    renamed = await files.rename_document(path, "trip 2")

    assert await files.read_document(renamed) == document
    await files.delete_document(renamed)
    assert not Path(renamed).exists()
