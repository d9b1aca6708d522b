"""
Style Resolver

Maps a file extension to its configured FiletypeRule.
"""

from typing import Mapping, Optional

from licensesnip.config.models import FiletypeRule


def extension_of(filename: str) -> Optional[str]:
    """
    Extension of a file name: the part after the last '.'.

    Returns None for names without a '.' or ending in one.

    >>> extension_of("a.b.rs")
    'rs'
    >>> extension_of("Makefile") is None
    True
    """
    if "." not in filename:
        return None
    ext = filename.rsplit(".", 1)[1]
    return ext or None


class StyleResolver:
    """Pure lookup against an extension → rule mapping"""

    def __init__(self, filetype_map: Mapping[str, FiletypeRule]):
        self.filetype_map = filetype_map

    def resolve(self, extension: Optional[str]) -> Optional[FiletypeRule]:
        """Rule for an extension, enabled or not; None if unconfigured"""
        if not extension:
            return None
        return self.filetype_map.get(extension)

    def resolve_filename(self, filename: str) -> Optional[FiletypeRule]:
        return self.resolve(extension_of(filename))
