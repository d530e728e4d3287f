"""Workspace state for braindown: vaults, the open document, UI selection and toasts."""

from braindown.core.notify.queue import NotificationQueue
from braindown.core.session.store import DocumentSessionStore
from braindown.core.ui.selection import SelectionStore
from braindown.core.vault.activation import VaultActivationResolver
from braindown.core.vault.store import VaultConfigStore
from braindown.workspace import Workspace

__all__ = [
    "DocumentSessionStore",
    "NotificationQueue",
    "SelectionStore",
    "VaultActivationResolver",
    "VaultConfigStore",
    "Workspace",
]
