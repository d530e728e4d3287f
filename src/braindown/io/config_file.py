"""JSON file persistence for the workspace configuration."""

import asyncio
import json
from pathlib import Path

from loguru import logger

from braindown.config import resolve_config_file
from braindown.errors import PersistenceError
from braindown.models.vault import WorkspaceConfig


class ConfigFile:
    """Store the workspace configuration as a JSON file.

    - A missing file reads as an empty configuration.
    - Each save writes the full configuration, creating the parent directory
      on demand; the file is left untouched if its contents are the same.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else resolve_config_file()
        logger.debug("Config file at {}", self.path)

    async def load_config(self) -> WorkspaceConfig:
        return await asyncio.to_thread(self._read)

    async def persist_config(self, config: WorkspaceConfig) -> None:
        await asyncio.to_thread(self._write, config)

    def _read(self) -> WorkspaceConfig:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            logger.debug("No config file at {}, starting empty", self.path)
            return WorkspaceConfig()
        except OSError as e:
            msg = f"Failed to read config file {str(self.path)!r}: {e}"
            raise PersistenceError(msg) from e

        try:
            data = json.loads(raw.decode("utf-8"))
            if not isinstance(data, dict):
                msg = f"expected an object, got {type(data).__name__}"
                raise ValueError(msg)
            return WorkspaceConfig.from_dict(data)
        except (ValueError, KeyError, TypeError) as e:
            msg = f"Failed to parse config file {str(self.path)!r}: {e}"
            raise PersistenceError(msg) from e

    def _write(self, config: WorkspaceConfig) -> None:
        contents = json.dumps(config.to_dict(), indent=2) + "\n"
        try:
            if self.path.read_text(encoding="utf-8") == contents:
                logger.debug("Config unchanged, not writing {}", self.path)
                return
        except (FileNotFoundError, UnicodeDecodeError):
            pass
        except OSError as e:
            msg = f"Failed to read config file {str(self.path)!r}: {e}"
            raise PersistenceError(msg) from e

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_name(self.path.name + ".tmp")
            tmp.write_text(contents, encoding="utf-8")
            tmp.replace(self.path)
        except OSError as e:
            msg = f"Failed to write config file {str(self.path)!r}: {e}"
            raise PersistenceError(msg) from e
        logger.debug("Wrote {} vault(s) to {}", len(config.vaults), self.path)
