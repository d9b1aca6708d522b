"""
Configuration Module

Exports filetype rules, comment styles and the config store.
"""

from licensesnip.config.models import (
    BlockDelimiters,
    CommentStyle,
    Config,
    FiletypeRule,
    LinePrefix,
    parse_filetypes,
    parse_rule
)
from licensesnip.config.config_store import ConfigStore, default_config_home, load_config
from licensesnip.config.defaults import DEFAULT_CONFIG

__all__ = [
    "BlockDelimiters",
    "CommentStyle",
    "Config",
    "FiletypeRule",
    "LinePrefix",
    "parse_filetypes",
    "parse_rule",
    "ConfigStore",
    "default_config_home",
    "load_config",
    "DEFAULT_CONFIG"
]
