"""Validation rules for vault names and paths."""

import re
from collections.abc import Iterable
from dataclasses import dataclass

from braindown.config import VAULT_NAME_MAX_LENGTH
from braindown.models.vault import VaultEntry

# Letters, digits, spaces, hyphens and underscores.
_NAME_PATTERN = re.compile(r"[A-Za-z0-9 _-]+")


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation rule. error is None when valid."""

    valid: bool
    error: str | None = None
    duplicate: bool = False


_VALID = ValidationResult(valid=True)


def validate_vault_name(
    name: str,
    existing_vaults: Iterable[VaultEntry],
    exclude_id: str | None = None,
) -> ValidationResult:
    """Validate a vault name.

    Rules:
    - No leading/trailing whitespace.
    - 1 to VAULT_NAME_MAX_LENGTH characters.
    - Only letters, digits, spaces, hyphens and underscores.
    - Unique among existing vaults (case-insensitive), ignoring exclude_id.

    Args:
        name: The candidate name.
        existing_vaults: Vaults to check uniqueness against.
        exclude_id: Vault to skip in the uniqueness check (rename).
    """
    trimmed = name.strip()
    if trimmed != name:
        return ValidationResult(False, "Name cannot have leading or trailing whitespace")
    if not trimmed:
        return ValidationResult(False, "Name is required")
    if len(trimmed) > VAULT_NAME_MAX_LENGTH:
        return ValidationResult(False, f"Name must be {VAULT_NAME_MAX_LENGTH} characters or less")
    if not _NAME_PATTERN.fullmatch(trimmed):
        return ValidationResult(
            False, "Name can only contain letters, numbers, spaces, hyphens, and underscores"
        )

    lowered = trimmed.lower()
    for vault in existing_vaults:
        if vault.id != exclude_id and vault.name.lower() == lowered:
            return ValidationResult(False, "A vault with this name already exists", duplicate=True)

    return _VALID


def normalize_path(path: str) -> str:
    """Normalize a path for comparison.

    Strips trailing separators, converts backslashes to slashes and
    lower-cases (case-insensitive filesystems are the common case).
    """
    return path.rstrip("/\\").replace("\\", "/").lower()


def is_path_duplicate(
    path: str,
    existing_vaults: Iterable[VaultEntry],
    exclude_id: str | None = None,
) -> bool:
    """Check whether another vault (not exclude_id) already uses path."""
    normalized = normalize_path(path)
    return any(
        v.id != exclude_id and normalize_path(v.path) == normalized for v in existing_vaults
    )
