"""
Traversal Driver

Walks a project tree and applies the header pipeline to every regular file:

    entry → should_visit? → regular file? → extension → rule → enabled?
          → synthesize → apply (or check / remove) → counters

Single pass, sequential, no retries. A failure on one file or directory is
logged, reported through `on_error` and recorded in the summary; it never
stops the run.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Dict, Iterator, Optional, Tuple, Union

from licensesnip.config.config_store import LOCAL_CONFIG_NAME
from licensesnip.config.models import Config, FiletypeRule
from licensesnip.core import file_mutator
from licensesnip.core.header import HeaderMatcher, header_matcher, synthesize
from licensesnip.core.ignore import IgnoreFilter
from licensesnip.core.models import ApplyResult, FileFailure, Mode, RemoveResult, Summary
from licensesnip.core.style_resolver import StyleResolver, extension_of
from licensesnip.errors import MutationError
from licensesnip.license.template import LICENSE_FILE_NAME, LicenseTemplate

logger = logging.getLogger(__name__)

ShouldVisit = Callable[[Path, bool], bool]
ErrorCallback = Callable[[Path, BaseException], None]


def _log_error(path: Path, error: BaseException) -> None:
    logger.warning(f"Cannot read {path}: {error}")


def iter_entries(
    directory: Path,
    should_visit: ShouldVisit,
    on_error: ErrorCallback = _log_error
) -> Iterator[Tuple[Path, os.DirEntry]]:
    """
    Recursively yield (path, entry) pairs under `directory`, sorted by name.

    Entries rejected by `should_visit` are not yielded, and rejected
    directories are not descended into. Symlinks are yielded but never
    followed.
    """
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        on_error(Path(directory), e)
        return

    for entry in entries:
        path = Path(directory) / entry.name
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError as e:
            on_error(path, e)
            continue

        if not should_visit(path, is_dir):
            continue

        yield path, entry

        if is_dir:
            yield from iter_entries(path, should_visit, on_error)


class TraversalDriver:
    """
    One run of the header pipeline over a tree.

    Holds the run-scoped state (summary, matcher cache); create a fresh
    driver per run.
    """

    def __init__(
        self,
        root: Union[str, Path],
        config: Config,
        license: LicenseTemplate,
        year: int,
        should_visit: Optional[ShouldVisit] = None,
        on_error: Optional[ErrorCallback] = None,
        mode: Mode = Mode.ADD
    ):
        """
        Initialize traversal driver.

        Args:
            root: Traversal root
            config: Loaded configuration (extension → rule)
            license: License template
            year: Year substituted into headers
            should_visit: Entry filter (default: IgnoreFilter(root))
            on_error: Called with (path, error) for every per-entry failure
            mode: ADD, CHECK or REMOVE
        """
        self.root = Path(root)
        self.resolver = StyleResolver(config.get_filetype_map())
        self.license = license
        self.year = year
        self.should_visit = should_visit if should_visit is not None else IgnoreFilter(self.root)
        self.on_error = on_error
        self.mode = mode
        self.summary = Summary()
        self._matchers: Dict[str, HeaderMatcher] = {}
        self._own_files = {self.root / LICENSE_FILE_NAME, self.root / LOCAL_CONFIG_NAME}

    def _matcher(self, rule: FiletypeRule) -> HeaderMatcher:
        if rule.extension not in self._matchers:
            self._matchers[rule.extension] = header_matcher(self.license, rule)
        return self._matchers[rule.extension]

    def _report(self, path: Path, error: BaseException) -> None:
        logger.warning(
            f"Failed to process {path}: {error}",
            extra={'extra_fields': {'path': str(path), 'error_type': type(error).__name__}}
        )
        self.summary.failures.append(FileFailure(path=path, error=str(error)))
        if self.on_error is not None:
            self.on_error(path, error)

    def process_file(self, path: Path, rule: FiletypeRule) -> None:
        """Run the mode's operation on one file with an enabled rule"""
        matcher = self._matcher(rule)

        if self.mode is Mode.ADD:
            header = synthesize(self.license, path.name, self.year, rule)
            if file_mutator.apply(path, header, matcher) is ApplyResult.ADDED:
                self.summary.files_changed += 1

        elif self.mode is Mode.CHECK:
            if not file_mutator.has_header(path, matcher):
                logger.info(f"Missing license header: {path}")
                self.summary.missing.append(path)

        elif self.mode is Mode.REMOVE:
            if file_mutator.remove(path, matcher) is RemoveResult.REMOVED:
                self.summary.files_changed += 1

    def visit(self, entry: os.DirEntry, path: Path) -> None:
        """Filter one entry down to an enabled rule and process it"""
        try:
            if not entry.is_file(follow_symlinks=False):
                return
        except OSError as e:
            self._report(path, e)
            return

        if path in self._own_files:
            return

        extension = extension_of(entry.name)
        if extension is None:
            return

        rule = self.resolver.resolve(extension)
        if rule is None:
            return

        self.summary.filetypes_matched += 1

        if not rule.enabled:
            logger.debug(f"Skipping {path}: filetype '{extension}' is disabled")
            return

        try:
            self.process_file(path, rule)
        except MutationError as e:
            self._report(path, e)

    def run(self) -> Summary:
        """
        Walk the tree once and return the run's counters.
        """
        logger.info(
            f"Starting {self.mode.value} run in {self.root}",
            extra={'extra_fields': {'root': str(self.root), 'year': self.year}}
        )

        for path, entry in iter_entries(self.root, self.should_visit, self._report):
            self.visit(entry, path)

        logger.info(
            f"Finished {self.mode.value} run: {self.summary.files_changed} changed, "
            f"{self.summary.filetypes_matched} matched, {self.summary.files_failed} failed"
        )
        return self.summary


def run(
    root: Union[str, Path],
    config: Config,
    license: LicenseTemplate,
    year: int,
    should_visit: Optional[ShouldVisit] = None,
    on_error: Optional[ErrorCallback] = None,
    mode: Mode = Mode.ADD
) -> Summary:
    """
    Apply the header pipeline to every file under `root`.

    Returns:
        Summary with files_changed, filetypes_matched, missing and failures
    """
    driver = TraversalDriver(
        root, config, license, year,
        should_visit=should_visit,
        on_error=on_error,
        mode=mode
    )
    return driver.run()
