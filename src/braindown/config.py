"""Configuration constants for the braindown workspace."""

from pathlib import Path

# Directory holding config.json. First directory which is found is used.
CONFIG_DIRECTORIES: list[Path] = [
    Path("~/.local/share/braindown").expanduser(),
    Path("~/.config/braindown").expanduser(),
    Path("~/.braindown").expanduser(),
]

CONFIG_FILE_NAME = "config.json"

# Document files inside a vault.
DOCUMENT_SUFFIX = ".mschema"
DOCUMENT_VERSION = 1

VAULT_NAME_MAX_LENGTH = 50

MAX_RECENT_FILES = 10

# 0 means the toast stays until dismissed.
DEFAULT_TOAST_TTL_MILLIS = 5000

DEFAULT_CANVAS_BACKGROUND = "#1e1e2e"


def resolve_config_directory() -> Path:
    """Return the first existing config directory, or the first candidate if none exist."""
    for candidate in CONFIG_DIRECTORIES:
        if candidate.is_dir():
            return candidate
    return CONFIG_DIRECTORIES[0]


def resolve_config_file() -> Path:
    """Return the path of the workspace config file."""
    return resolve_config_directory() / CONFIG_FILE_NAME
