"""
Config store for the kirei CLI.

This module implements the ConfigStore class that persists the single
configuration record as pretty-printed JSON in the user's config directory.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError as PydanticValidationError

from config.settings import settings
from schemas.config_schemas import Config
from tools.error_handler import ConfigError

logger = logging.getLogger(__name__)


class ConfigStore:
    """
    Loads and saves the configuration record.

    Storage format:
    - One JSON document at {config_dir}/{config_file_name}
    - Written with indent=2 and a trailing newline
    - Replaced wholesale on every save via a temporary file in the same directory
    """

    def __init__(
        self,
        config_dir: Optional[Union[str, Path]] = None,
        file_name: Optional[str] = None,
    ):
        """
        Resolve the config location. Nothing is created on disk here.

        Args:
            config_dir: Directory holding the config file (defaults to settings.config_dir)
            file_name: Config file name (defaults to settings.config_file_name)
        """
        raw_dir = config_dir if config_dir is not None else settings.config_dir
        try:
            self.config_dir = Path(raw_dir).expanduser()
        except RuntimeError as exc:
            raise ConfigError(
                "Could not determine a config directory for this platform",
                detail=str(exc),
            ) from exc
        self.config_path = self.config_dir / (file_name or settings.config_file_name)

    def path(self) -> Path:
        """Return the config file location."""
        return self.config_path

    def load(self) -> Config:
        """
        Load the stored config.

        Returns:
            The stored Config, or a default Config when the file is missing,
            unreadable or invalid
        """
        try:
            raw = self.config_path.read_text(encoding="utf-8")
            return Config.model_validate_json(raw)
        except FileNotFoundError:
            return Config()
        except (OSError, UnicodeDecodeError, PydanticValidationError) as exc:
            # Unreadable config is treated as "no config yet".
            logger.debug("Ignoring unreadable config at %s: %s", self.config_path, exc)
            return Config()

    def save(self, config: Config) -> Path:
        """
        Store the config, replacing any previous file.

        Args:
            config: Config record to persist

        Returns:
            Path of the written file

        Raises:
            ConfigError: if the directory or file cannot be written; the
                previous file is left as it was
        """
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ConfigError(
                f"Failed to create config directory: {self.config_dir}",
                detail=exc.strerror or str(exc),
            ) from exc

        payload = self.dumps(config)
        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.config_dir,
                prefix=f".{self.config_path.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                tmp_name = handle.name
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self.config_path)
        except OSError as exc:
            if tmp_name is not None:
                _discard(Path(tmp_name))
            raise ConfigError(
                f"Failed to write config file: {self.config_path}",
                detail=exc.strerror or str(exc),
            ) from exc

        logger.info("Saved config to %s", self.config_path)
        return self.config_path

    @staticmethod
    def dumps(config: Config) -> str:
        return config.model_dump_json(indent=2) + "\n"


def _discard(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.debug("Could not remove temporary config file %s: %s", path, exc)
