"""
Ignore Filter

Default `should_visit` predicate for traversal.

Skips hidden entries (names starting with '.') and anything matched by a
`.gitignore` or `.ignore` file in the entry's directory or any directory
above it, up to the traversal root. Pattern semantics are gitignore's, as
implemented by pathspec; the deepest ignore file with a matching pattern
decides.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

import pathspec

IGNORE_FILE_NAMES = (".gitignore", ".ignore")


class IgnoreFilter:
    """
    Callable `(path, is_dir) -> bool`, True if traversal should visit `path`.

    Ignore files are read lazily, once per directory.
    """

    def __init__(self, root: Union[str, Path], hidden: bool = False, use_ignore_files: bool = True):
        """
        Initialize ignore filter.

        Args:
            root: Traversal root; ignore files above it are not consulted
            hidden: Visit hidden entries too
            use_ignore_files: Honour .gitignore/.ignore files
        """
        self.logger = logging.getLogger(__name__)
        self.root = Path(root)
        self.hidden = hidden
        self.use_ignore_files = use_ignore_files
        self._specs: Dict[Path, Optional[pathspec.GitIgnoreSpec]] = {}

    def _read_patterns(self, directory: Path) -> List[str]:
        lines: List[str] = []
        for name in IGNORE_FILE_NAMES:
            ignore_file = directory / name
            if not ignore_file.is_file():
                continue
            try:
                lines.extend(ignore_file.read_text(encoding="utf-8").splitlines())
            except (OSError, UnicodeDecodeError) as e:
                self.logger.warning(
                    f"Could not read {ignore_file}: {e}",
                    extra={'extra_fields': {'path': str(ignore_file)}}
                )
        return lines

    def spec_for(self, directory: Path) -> Optional[pathspec.GitIgnoreSpec]:
        """Compiled patterns of one directory's ignore files, None if it has none"""
        if directory not in self._specs:
            lines = self._read_patterns(directory)
            self._specs[directory] = pathspec.GitIgnoreSpec.from_lines(lines) if lines else None
        return self._specs[directory]

    def _ancestors(self, path: Path) -> List[Path]:
        """Directories from the root down to path's parent"""
        try:
            relative_parent = path.parent.relative_to(self.root)
        except ValueError:
            return []

        directories = [self.root]
        current = self.root
        for part in relative_parent.parts:
            current = current / part
            directories.append(current)
        return directories

    def is_ignored(self, path: Path, is_dir: bool) -> bool:
        """
        True if the deepest ignore file with a matching pattern excludes `path`.

        A `!pattern` in a nested ignore file re-includes a path excluded by
        an ignore file further up, as in git.
        """
        if not self.use_ignore_files:
            return False

        for directory in reversed(self._ancestors(path)):
            spec = self.spec_for(directory)
            if spec is None:
                continue
            relative = path.relative_to(directory).as_posix()
            if is_dir:
                relative += "/"
            include = spec.check_file(relative).include
            if include is not None:
                return include
        return False

    def __call__(self, path: Union[str, Path], is_dir: bool) -> bool:
        path = Path(path)
        if not self.hidden and path.name.startswith("."):
            return False
        return not self.is_ignored(path, is_dir)
