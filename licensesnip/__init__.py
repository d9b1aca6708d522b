"""
licensesnip — License Header Insertion Tool

Inserts a license header into every source file of a project tree,
formatted per file type from a single license template.
"""

from .__version__ import __version__

__all__ = [
    '__version__',
    'config',
    'core',
    'license',
    'logging',
    'utils'
]
