"""Error taxonomy for workspace operations."""


class WorkspaceError(Exception):
    """Base class for all workspace errors."""


class ValidationError(WorkspaceError):
    """A vault name or document failed a static rule."""


class DuplicateNameError(ValidationError):
    """Another vault already uses this name (case-insensitive)."""


class DocumentShapeError(ValidationError):
    """A document is structurally malformed."""


class DuplicatePathError(WorkspaceError):
    """Another vault already points at this directory."""


class NotFoundError(WorkspaceError):
    """The targeted vault is no longer in the current list."""


class InaccessibleError(WorkspaceError):
    """A path does not exist, is not a directory, or is not readable."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Vault path is not accessible: {path!r}")
        self.path = path


class AllVaultsInaccessibleError(WorkspaceError):
    """Every configured vault failed the accessibility check."""

    def __init__(self, paths: list[str]) -> None:
        super().__init__(
            f"None of the {len(paths)} configured vaults is accessible: {paths!r}"
        )
        self.paths = paths


class PersistenceError(WorkspaceError):
    """Saving or loading the workspace configuration failed."""
