"""
licensesnip Main Entry Point

Usage:
    licensesnip                 # add headers to every matching file
    licensesnip check           # list files without a header, exit 1 if any
    licensesnip remove          # strip headers added by licensesnip
    licensesnip help            # explain config and license files
"""

import argparse
import logging
import sys
import uuid
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from colorama import Fore, Style

from licensesnip import __version__
from licensesnip.config.config_store import LOCAL_CONFIG_NAME, USER_CONFIG_NAME, ConfigStore
from licensesnip.core.models import Mode, Summary
from licensesnip.core.traversal import run
from licensesnip.errors import (
    ConfigCreateError,
    ConfigFormatError,
    ConfigReadError,
    LicenseNotFoundError
)
from licensesnip.license.template import (
    FILE_PLACEHOLDER,
    LICENSE_FILE_NAME,
    YEAR_PLACEHOLDER,
    read_license
)
from licensesnip.logging.logger import configure_logging, get_logger

# sysexits.h
EX_OK = 0
EX_CHECK_FAILED = 1
EX_NOINPUT = 66
EX_IOERR = 74
EX_CONFIG = 78

COMMANDS = ("add", "check", "remove", "help")


def help_text(config_home: Path) -> str:
    return f"""\
licensesnip v{__version__}

Adds a license header to every source file in the current project.

License file:
  Put the header text in a {LICENSE_FILE_NAME} file in the project root.
  {YEAR_PLACEHOLDER} is replaced with the current year and {FILE_PLACEHOLDER}
  with the file's name.

Config files:
  User config:  {config_home}/{USER_CONFIG_NAME} (created on first run)
  Local config: ./{LOCAL_CONFIG_NAME} (optional, overrides the user config)

  Each entry under `filetypes` maps one or more comma-separated
  extensions to a comment style:

    filetypes:
      rs,go,js:
        before_line: "// "
      css:
        before_block: "/*"
        before_line: " * "
        after_block: " */"
      md:
        enable: false
        before_block: "<!--"
        after_block: "-->"

Commands:
  (none), add   Add missing headers
  check         List files without a header (exit status 1 if any)
  remove        Remove headers matching the license file
  help          Show this message

Files and directories matched by .gitignore or .ignore, and hidden
entries, are skipped.
"""


def _echo(color: str, message: str) -> None:
    print(f"{color}{message}{Style.RESET_ALL}")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="licensesnip",
        description="Add license headers to source files."
    )
    parser.add_argument('command', nargs='?', default='add', choices=COMMANDS, help='What to do (default: add)')
    parser.add_argument('--root', default='.', help='Project root to traverse (default: current directory)')
    parser.add_argument('--year', type=int, help='Year substituted into headers (default: current year)')
    parser.add_argument('--log-level', default='ERROR', help='Structured log level written to stderr (default: ERROR)')
    parser.add_argument('--log-config', help='YAML logging config (dictConfig schema)')
    parser.add_argument('--version', action='version', version=f'licensesnip {__version__}')
    return parser.parse_args(argv)


def _print_error(path: Path, error: BaseException) -> None:
    _echo(Fore.RED, f"✗ {error}")


def _print_summary(mode: Mode, summary: Summary) -> None:
    if mode is Mode.ADD:
        _echo(Fore.GREEN, f"✔ Added license header to {summary.files_changed} files.")
    elif mode is Mode.REMOVE:
        _echo(Fore.GREEN, f"✔ Removed license header from {summary.files_changed} files.")
    elif summary.missing:
        _echo(Fore.RED, f"✗ {summary.files_missing} files are missing a license header:")
        for path in summary.missing:
            print(f"  {path}")
    else:
        _echo(Fore.GREEN, "✔ All matching files have a license header.")

    if summary.failures:
        _echo(Fore.YELLOW, f"⚠ {summary.files_failed} files could not be processed.")

    if summary.no_filetypes_matched:
        print(
            f"{Fore.YELLOW}⚠ No supported file types were found. You may need to add styling rules "
            f"for your filetypes in your user/local config file. Run{Style.RESET_ALL}\n\n"
            f"licensesnip help\n\n"
            f"{Fore.YELLOW}for more info.{Style.RESET_ALL}"
        )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for licensesnip.

    Returns:
        Process exit status
    """
    args = parse_args(argv)
    root = Path(args.root)
    store = ConfigStore(root)

    if args.command == "help":
        print(help_text(store.config_home))
        return EX_OK

    level = logging.getLevelName(args.log_level.upper())
    if not isinstance(level, int):
        level = logging.ERROR
    if args.log_config and configure_logging(args.log_config, default_level=level):
        # Levels and handlers come from the dictConfig file
        logger = logging.getLogger("licensesnip")
    else:
        logger = get_logger("licensesnip", run_id=f"run-{uuid.uuid4().hex[:8]}", level=level)

    if not root.is_dir():
        _echo(Fore.RED, f"Error: {root} is not a directory.")
        return EX_NOINPUT

    try:
        config = store.load()
    except ConfigFormatError as e:
        _echo(Fore.RED, "Error: Your config file wasn't formatted correctly.")
        print(f"  {e}")
        return EX_CONFIG
    except ConfigCreateError as e:
        _echo(Fore.RED, "Error: Failed to create default config file.")
        print(f"  {e}")
        return EX_IOERR
    except ConfigReadError as e:
        _echo(Fore.RED, "Error: failed to load user config file.")
        print(f"  {e}")
        return EX_IOERR

    try:
        template = read_license(root)
    except LicenseNotFoundError:
        _echo(Fore.RED, f"Error: Couldn't find a {LICENSE_FILE_NAME} file in the project root.")
        return EX_CONFIG

    mode = Mode(args.command)
    year = args.year if args.year is not None else datetime.now().year
    logger.debug(f"licensesnip v{__version__}: {mode.value} in {root.resolve()} for {year}")

    summary = run(root, config, template, year, on_error=_print_error, mode=mode)
    _print_summary(mode, summary)

    if mode is Mode.CHECK and summary.missing:
        return EX_CHECK_FAILED
    return EX_OK


if __name__ == "__main__":
    sys.exit(main())
