"""
License Template

The raw license text read from `.licensesnip` in the traversal root.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple, Union

from licensesnip.errors import LicenseNotFoundError

LICENSE_FILE_NAME = ".licensesnip"

YEAR_PLACEHOLDER = "{{year}}"
FILE_PLACEHOLDER = "{{file}}"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LicenseTemplate:
    """Ordered raw template lines, possibly containing placeholders"""
    lines: Tuple[str, ...]

    @classmethod
    def from_text(cls, text: str) -> "LicenseTemplate":
        """Split text into lines; a trailing newline does not add an empty line"""
        return cls(lines=tuple(text.splitlines()))

    def get_lines(self) -> Tuple[str, ...]:
        return self.lines


def read_license(root: Union[str, Path] = ".") -> LicenseTemplate:
    """
    Read the license template from the traversal root.

    Raises:
        LicenseNotFoundError: If `.licensesnip` is missing or unreadable
    """
    path = Path(root) / LICENSE_FILE_NAME
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LicenseNotFoundError(
            f"Couldn't find a {LICENSE_FILE_NAME} file in {Path(root).resolve()}"
        ) from e

    template = LicenseTemplate.from_text(text)
    logger.debug(f"Read {len(template.lines)} license lines from {path}")
    return template
