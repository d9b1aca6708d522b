"""
Config Data Models

Filetype rules and the comment styles used to wrap license headers.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Union

from licensesnip.errors import ConfigFormatError


@dataclass(frozen=True)
class LinePrefix:
    """Every header line gets the same prefix (e.g. '// ', '# ')"""
    prefix: str


@dataclass(frozen=True)
class BlockDelimiters:
    """Header wrapped in an open/close pair, each on its own line"""
    open: str
    close: str
    line_prefix: str = ""  # Applied to body lines, e.g. ' * '


CommentStyle = Union[LinePrefix, BlockDelimiters]


@dataclass(frozen=True)
class FiletypeRule:
    """Per-extension header formatting rule"""
    extension: str
    comment_style: CommentStyle
    enabled: bool = True


def parse_rule(extension: str, entry: Mapping[str, Any]) -> FiletypeRule:
    """
    Build a FiletypeRule from one `filetypes` config entry.

    Entries with `before_block` or `after_block` become block styles,
    anything else needs `before_line` and becomes a line style.

    Raises:
        ConfigFormatError: If the entry has no usable comment style
    """
    if not isinstance(entry, Mapping):
        raise ConfigFormatError(f"Filetype '{extension}' must be a mapping, got {type(entry).__name__}")

    enabled = entry.get("enable", True)
    if not isinstance(enabled, bool):
        raise ConfigFormatError(f"Filetype '{extension}': 'enable' must be true or false")

    for key in ("before_block", "after_block", "before_line"):
        if key in entry and not isinstance(entry[key], str):
            raise ConfigFormatError(f"Filetype '{extension}': '{key}' must be a string")

    if "before_block" in entry or "after_block" in entry:
        if "before_block" not in entry or "after_block" not in entry:
            raise ConfigFormatError(
                f"Filetype '{extension}': block style needs both 'before_block' and 'after_block'"
            )
        style = BlockDelimiters(
            open=entry["before_block"],
            close=entry["after_block"],
            line_prefix=entry.get("before_line", "")
        )
    elif "before_line" in entry:
        style = LinePrefix(entry["before_line"])
    else:
        raise ConfigFormatError(
            f"Filetype '{extension}' defines no comment style "
            "(set 'before_line' or 'before_block'/'after_block')"
        )

    return FiletypeRule(extension=extension, comment_style=style, enabled=enabled)


def parse_filetypes(filetypes: Mapping[str, Any]) -> Dict[str, FiletypeRule]:
    """
    Expand a `filetypes` mapping into one rule per extension.

    Keys may list several extensions separated by commas ("js,ts").

    Raises:
        ConfigFormatError: On duplicate extensions or invalid entries
    """
    if not isinstance(filetypes, Mapping):
        raise ConfigFormatError("'filetypes' must be a mapping of extension to rule")

    rules: Dict[str, FiletypeRule] = {}
    for key, entry in filetypes.items():
        for ext in str(key).split(","):
            ext = ext.strip().lstrip(".")
            if not ext:
                raise ConfigFormatError(f"Empty extension in filetype key '{key}'")
            if ext in rules:
                raise ConfigFormatError(f"Extension '{ext}' is configured more than once")
            rules[ext] = parse_rule(ext, entry)

    return rules


@dataclass
class Config:
    """Loaded configuration: extension → rule"""
    filetypes: Dict[str, FiletypeRule] = field(default_factory=dict)

    def get_filetype_map(self) -> Mapping[str, FiletypeRule]:
        return self.filetypes

    def merged_with(self, other: "Config") -> "Config":
        """Return a new Config where `other`'s rules win per extension"""
        merged = dict(self.filetypes)
        merged.update(other.filetypes)
        return Config(filetypes=merged)
