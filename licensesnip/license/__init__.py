"""
License Module

Provides the license template and its reader.
"""

from .template import (
    FILE_PLACEHOLDER,
    LICENSE_FILE_NAME,
    YEAR_PLACEHOLDER,
    LicenseTemplate,
    read_license
)

__all__ = [
    'FILE_PLACEHOLDER', 'LICENSE_FILE_NAME', 'YEAR_PLACEHOLDER',
    'LicenseTemplate', 'read_license'
]
