"""
Header Synthesizer

Turns license template lines into the exact comment block inserted at the
top of a file, and builds the matcher that recognises such a block later.

Both paths go through `_wrap`, so a header is always recognised by the
matcher built from the same template and style, whatever year or file name
was substituted into it.
"""

import re
from typing import List, Pattern, Sequence, Union

from licensesnip.config.models import BlockDelimiters, CommentStyle, FiletypeRule, LinePrefix
from licensesnip.license.template import FILE_PLACEHOLDER, YEAR_PLACEHOLDER, LicenseTemplate

# "2022", "2019-2022", "2019, 2021", also years outside 1000-9999
YEAR_PATTERN = r"\d+(?:(?:\s*-\s*|,\s*)\d+)*"
FILE_PATTERN = r".*?"

_PLACEHOLDER_SPLIT = re.compile(
    "(" + re.escape(YEAR_PLACEHOLDER) + "|" + re.escape(FILE_PLACEHOLDER) + ")"
)

TemplateLike = Union[LicenseTemplate, Sequence[str]]


def _template_lines(template: TemplateLike) -> List[str]:
    if isinstance(template, LicenseTemplate):
        return list(template.lines)
    return list(template)


def _prefixed(prefix: str, line: str) -> str:
    # Empty template lines must not leave trailing blanks behind
    if not line:
        return prefix.rstrip()
    return prefix + line


def _wrap(lines: List[str], style: CommentStyle) -> List[str]:
    if isinstance(style, LinePrefix):
        return [_prefixed(style.prefix, line) for line in lines]

    if isinstance(style, BlockDelimiters):
        body = [_prefixed(style.line_prefix, line) for line in lines]
        return [style.open] + body + [style.close]

    raise TypeError(f"Unknown comment style: {style!r}")


def format_lines(template: TemplateLike, filename: str, year: int) -> List[str]:
    """Substitute placeholders; lines without placeholders pass through unchanged"""
    # Year first, so a file name containing a placeholder token stays literal
    return [
        line.replace(YEAR_PLACEHOLDER, str(year)).replace(FILE_PLACEHOLDER, filename)
        for line in _template_lines(template)
    ]


def synthesize(template: TemplateLike, filename: str, year: int, rule: FiletypeRule) -> List[str]:
    """
    Build the header lines for one file.

    Args:
        template: License template (or its raw lines)
        filename: Name substituted for {{file}}
        year: Year substituted for {{year}}
        rule: Filetype rule supplying the comment style

    Returns:
        Header lines, without line terminators

    Example:
        >>> rule = FiletypeRule("go", LinePrefix("// "))
        >>> synthesize(["Copyright {{year}} {{file}}"], "main.go", 2022, rule)
        ['// Copyright 2022 main.go']
    """
    return _wrap(format_lines(template, filename, year), rule.comment_style)


def _line_pattern(wrapped: str) -> Pattern:
    parts = []
    for piece in _PLACEHOLDER_SPLIT.split(wrapped.rstrip()):
        if piece == YEAR_PLACEHOLDER:
            parts.append(YEAR_PATTERN)
        elif piece == FILE_PLACEHOLDER:
            parts.append(FILE_PATTERN)
        else:
            parts.append(re.escape(piece))
    return re.compile("".join(parts))


class HeaderMatcher:
    """
    Recognises a header built from a given template and comment style.

    Placeholders match any year (or year range) and any file name, and
    trailing whitespace is ignored on every line.
    """

    def __init__(self, line_patterns: List[Pattern]):
        self.line_patterns = line_patterns

    def __len__(self) -> int:
        return len(self.line_patterns)

    def matches_at(self, lines: Sequence[str], start: int = 0) -> bool:
        """True if `lines[start:]` begins with a header"""
        if len(lines) - start < len(self.line_patterns):
            return False
        for offset, pattern in enumerate(self.line_patterns):
            if not pattern.fullmatch(lines[start + offset].rstrip()):
                return False
        return True


def header_matcher(template: TemplateLike, rule: FiletypeRule) -> HeaderMatcher:
    """Build the matcher for headers of this template in this rule's style"""
    wrapped = _wrap(_template_lines(template), rule.comment_style)
    return HeaderMatcher([_line_pattern(line) for line in wrapped])
