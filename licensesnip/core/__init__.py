"""
licensesnip Core Module

Style resolution, header synthesis, file mutation and tree traversal.
"""

from .models import ApplyResult, FileFailure, Mode, RemoveResult, Summary
from .style_resolver import StyleResolver, extension_of
from .header import HeaderMatcher, format_lines, header_matcher, synthesize
from .ignore import IgnoreFilter
from .traversal import TraversalDriver, iter_entries, run

__all__ = [
    'ApplyResult', 'FileFailure', 'Mode', 'RemoveResult', 'Summary',
    'StyleResolver', 'extension_of',
    'HeaderMatcher', 'format_lines', 'header_matcher', 'synthesize',
    'IgnoreFilter',
    'TraversalDriver', 'iter_entries', 'run'
]
