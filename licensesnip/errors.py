"""
licensesnip Exceptions

Configuration-class errors abort a run before any file is touched.
Mutation errors are per file: the driver records them and moves on.
"""

from pathlib import Path
from typing import Optional


class LicensesnipError(Exception):
    """Base class for all licensesnip errors"""


class ConfigError(LicensesnipError):
    """Configuration could not be loaded"""


class ConfigFormatError(ConfigError):
    """Config file is not valid YAML/JSON or has an invalid shape"""


class ConfigCreateError(ConfigError):
    """Default user config file could not be created"""


class ConfigReadError(ConfigError):
    """Existing config file could not be read"""


class LicenseNotFoundError(LicensesnipError):
    """No license template file in the traversal root"""


class MutationError(LicensesnipError):
    """A single file could not be processed"""

    def __init__(self, path: Path, message: str, cause: Optional[BaseException] = None):
        super().__init__(f"{path}: {message}")
        self.path = Path(path)
        self.message = message
        self.cause = cause


class FileReadError(MutationError):
    """File vanished or is unreadable"""


class FileWriteError(MutationError):
    """File could not be rewritten (permissions, disk full)"""


class BinaryFileError(MutationError):
    """File content is not UTF-8 text"""
