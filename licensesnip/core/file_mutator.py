"""
File Mutator

Checks for, inserts and removes license headers in a single file.

Writes are atomic: new content goes to a temporary file next to the target,
which is then moved over it. A failed write leaves the original untouched.
"""

import logging
import shutil
import tempfile
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from licensesnip.core.header import HeaderMatcher
from licensesnip.core.models import ApplyResult, RemoveResult
from licensesnip.errors import BinaryFileError, FileReadError, FileWriteError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def read_text(path: PathLike) -> str:
    """
    Read a whole file as UTF-8, line terminators preserved.

    Raises:
        FileReadError: If the file is missing or unreadable
        BinaryFileError: If the content is not UTF-8 text
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise FileReadError(path, f"cannot read file: {e.strerror or e}", e) from e

    if b"\x00" in data:
        raise BinaryFileError(path, "file contains NUL bytes")

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise BinaryFileError(path, f"file is not valid UTF-8 ({e.reason} at byte {e.start})", e) from e


def write_text_atomic(path: PathLike, content: str) -> None:
    """
    Replace a file's content atomically, keeping its permission bits.

    Raises:
        FileWriteError: If the temp file cannot be written or moved into place
    """
    path = Path(path)
    try:
        temp_fd, temp_path = tempfile.mkstemp(
            dir=path.parent,
            prefix=".licensesnip_tmp_",
            suffix=path.suffix
        )
    except OSError as e:
        raise FileWriteError(path, f"cannot create temporary file: {e.strerror or e}", e) from e

    try:
        with open(temp_fd, 'wb') as f:
            f.write(content.encode("utf-8"))
        shutil.copymode(path, temp_path)

        # Atomic rename (overwrites existing file)
        shutil.move(temp_path, path)
    except OSError as e:
        Path(temp_path).unlink(missing_ok=True)
        raise FileWriteError(path, f"cannot write file: {e.strerror or e}", e) from e


BOM = "\ufeff"


def _newline_of(content: str) -> str:
    return "\r\n" if "\r\n" in content else "\n"


def _split(content: str) -> Tuple[str, List[str], List[str], int]:
    """Byte order mark, lines with terminators, lines without, index after any shebang"""
    bom = BOM if content.startswith(BOM) else ""
    lines = content[len(bom):].splitlines(keepends=True)
    bare = [line.rstrip("\r\n") for line in lines]
    start = 1 if lines and lines[0].startswith("#!") else 0
    return bom, lines, bare, start


def _find_header(bare: Sequence[str], start: int, matcher: HeaderMatcher) -> Optional[int]:
    """Index of the first header line, or None"""
    # A header whose first line itself starts with "#!" sits at index 0
    for index in sorted({0, start}):
        if matcher.matches_at(bare, index):
            return index
    return None


def has_header(path: PathLike, matcher: HeaderMatcher) -> bool:
    """True if the file already starts with a header (after any shebang)"""
    _, _, bare, start = _split(read_text(path))
    return _find_header(bare, start, matcher) is not None


def build_content(content: str, header_lines: Sequence[str]) -> str:
    """
    Content with the header inserted.

    The header goes first, or right after a `#!` line, and is followed by
    one blank line unless the file has nothing else in it. A byte order
    mark stays at the very start.
    """
    newline = _newline_of(content)
    bom, lines, _, start = _split(content)

    shebang = "".join(lines[:start])
    if shebang and not shebang.endswith(("\n", "\r")):
        shebang += newline
    rest = "".join(lines[start:])

    header_text = "".join(line + newline for line in header_lines)
    if rest:
        return bom + shebang + header_text + newline + rest
    return bom + shebang + header_text


def apply(path: PathLike, header_lines: Sequence[str], matcher: HeaderMatcher) -> ApplyResult:
    """
    Insert a header unless an equivalent one is already present.

    Args:
        path: File to modify
        header_lines: Output of header.synthesize for this file
        matcher: Output of header.header_matcher for the same template and rule

    Returns:
        ApplyResult.ADDED or ApplyResult.ALREADY_PRESENT

    Raises:
        MutationError: If the file cannot be read, decoded or written
    """
    path = Path(path)
    content = read_text(path)
    _, _, bare, start = _split(content)

    if _find_header(bare, start, matcher) is not None:
        logger.debug(f"Header already present in {path}")
        return ApplyResult.ALREADY_PRESENT

    write_text_atomic(path, build_content(content, header_lines))
    logger.info(
        f"Added license header to {path}",
        extra={'extra_fields': {'path': str(path), 'header_lines': len(header_lines)}}
    )
    return ApplyResult.ADDED


def remove(path: PathLike, matcher: HeaderMatcher) -> RemoveResult:
    """
    Remove a recognised header and the blank line following it.

    Raises:
        MutationError: If the file cannot be read, decoded or written
    """
    path = Path(path)
    content = read_text(path)
    bom, lines, bare, start = _split(content)

    index = _find_header(bare, start, matcher) if len(matcher) else None
    if index is None:
        return RemoveResult.NOT_PRESENT

    end = index + len(matcher)
    if end < len(bare) and not bare[end].strip():
        end += 1

    write_text_atomic(path, bom + "".join(lines[:index] + lines[end:]))
    logger.info(
        f"Removed license header from {path}",
        extra={'extra_fields': {'path': str(path)}}
    )
    return RemoveResult.REMOVED
