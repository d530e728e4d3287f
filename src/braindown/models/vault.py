"""Domain models for vaults and their configuration."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class VaultEntry:
    """A named directory holding documents."""

    id: str
    name: str
    path: str

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "name": self.name, "path": self.path}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VaultEntry":
        return cls(id=str(data["id"]), name=str(data["name"]), path=str(data["path"]))


@dataclass(frozen=True)
class WorkspaceConfig:
    """The persisted root object: an ordered list of vaults.

    Index 0 is the default vault.
    """

    vaults: tuple[VaultEntry, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"vaults": [v.to_dict() for v in self.vaults]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WorkspaceConfig":
        raw_vaults = data.get("vaults", [])
        if not isinstance(raw_vaults, list):
            msg = f"'vaults' must be a list, got {type(raw_vaults).__name__}"
            raise ValueError(msg)
        return cls(vaults=tuple(VaultEntry.from_dict(v) for v in raw_vaults))

    def find(self, vault_id: str) -> VaultEntry | None:
        for vault in self.vaults:
            if vault.id == vault_id:
                return vault
        return None

    def index_of(self, vault_id: str) -> int | None:
        for i, vault in enumerate(self.vaults):
            if vault.id == vault_id:
                return i
        return None


@dataclass(frozen=True)
class FileEntry:
    """A document file found in a vault directory."""

    name: str
    path: str
    modified_at: str

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "path": self.path, "modifiedAt": self.modified_at}
