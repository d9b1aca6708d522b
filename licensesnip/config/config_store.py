"""
Config Store

Locates, creates and loads licensesnip configuration.

Two files are read:
- the user config (created from DEFAULT_CONFIG if missing), shared by all
  projects of a user
- an optional project-local config in the traversal root, whose filetype
  rules override the user's per extension
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional, Union

import yaml
from filelock import FileLock, Timeout

from licensesnip.config.defaults import DEFAULT_CONFIG
from licensesnip.config.models import Config, parse_filetypes
from licensesnip.errors import ConfigCreateError, ConfigFormatError, ConfigReadError
from licensesnip.utils.config_loader import ConfigLoader

USER_CONFIG_NAME = "config.yaml"
LOCAL_CONFIG_NAME = "licensesnip.config.yaml"
LOCK_TIMEOUT_SECONDS = 10


def default_config_home() -> Path:
    """Directory holding the user config: $LICENSESNIP_CONFIG_HOME, $XDG_CONFIG_HOME/licensesnip or ~/.config/licensesnip"""
    override = os.environ.get("LICENSESNIP_CONFIG_HOME")
    if override:
        return Path(override)

    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "licensesnip"


class ConfigStore:
    """
    Loader for the user and project-local configuration files.
    """

    def __init__(self, root: Union[str, Path] = ".", config_home: Optional[Union[str, Path]] = None):
        """
        Initialize config store.

        Args:
            root: Traversal root, searched for the local config
            config_home: Directory of the user config (default: default_config_home())
        """
        self.logger = logging.getLogger(__name__)
        self.root = Path(root)
        self.config_home = Path(config_home) if config_home else default_config_home()
        self.user_config_path = self.config_home / USER_CONFIG_NAME
        self.local_config_path = self.root / LOCAL_CONFIG_NAME
        self.lock_path = Path(str(self.user_config_path) + ".lock")

    def ensure_user_config(self) -> bool:
        """
        Create the user config from defaults if it doesn't exist.

        Uses atomic file write pattern (write to temp, then rename) under a
        file lock, so concurrent first runs never see a half-written file.

        Returns:
            True if the file was created, False if it already existed

        Raises:
            ConfigCreateError: If the directory or file cannot be written
        """
        try:
            self.config_home.mkdir(parents=True, exist_ok=True)

            with FileLock(str(self.lock_path), timeout=LOCK_TIMEOUT_SECONDS):
                if self.user_config_path.exists():
                    return False

                temp_fd, temp_path = tempfile.mkstemp(
                    dir=self.config_home,
                    prefix=".config_tmp_",
                    suffix=".yaml"
                )

                try:
                    with open(temp_fd, 'w', encoding='utf-8') as f:
                        yaml.safe_dump(DEFAULT_CONFIG, f, default_flow_style=False, sort_keys=False)

                    shutil.move(temp_path, self.user_config_path)
                except BaseException:
                    Path(temp_path).unlink(missing_ok=True)
                    raise
        except (OSError, Timeout) as e:
            raise ConfigCreateError(f"Failed to create default config file {self.user_config_path}: {e}") from e

        self.logger.info(f"Created default config at {self.user_config_path}")
        return True

    def _load_file(self, path: Path) -> Config:
        try:
            raw = ConfigLoader.load(str(path), required_keys=["filetypes"])
        except yaml.YAMLError as e:
            raise ConfigFormatError(f"{path} is not formatted correctly: {e}") from e
        except ValueError as e:
            raise ConfigFormatError(f"{path}: {e}") from e
        except OSError as e:
            raise ConfigReadError(f"Failed to load config file {path}: {e}") from e

        try:
            return Config(filetypes=parse_filetypes(raw["filetypes"]))
        except ConfigFormatError as e:
            raise ConfigFormatError(f"{path}: {e}") from e

    def load(self) -> Config:
        """
        Load the effective configuration.

        Returns:
            User config merged with the local config (local wins per extension)

        Raises:
            ConfigCreateError: If the default user config cannot be created
            ConfigReadError: If a config file exists but cannot be read
            ConfigFormatError: If a config file is malformed
        """
        self.ensure_user_config()
        config = self._load_file(self.user_config_path)
        self.logger.debug(f"Loaded {len(config.filetypes)} filetype rules from {self.user_config_path}")

        if self.local_config_path.is_file():
            local = self._load_file(self.local_config_path)
            self.logger.debug(f"Loaded {len(local.filetypes)} filetype rules from {self.local_config_path}")
            config = config.merged_with(local)

        return config


def load_config(root: Union[str, Path] = ".", config_home: Optional[Union[str, Path]] = None) -> Config:
    """Load the effective configuration for a traversal root"""
    return ConfigStore(root, config_home).load()
