import argparse
import logging
import os
import sys

from permsearch.branding import VERSION, console, print_error, status_print
from permsearch.permissions import (
    FilterParseError,
    FilterSet,
    ScanConfig,
    TreeWalker,
    parse_filter_set,
)

logger = logging.getLogger(__name__)


def filter_set_argument(value: str) -> FilterSet:
    """argparse ``type`` hook turning a policy string into a FilterSet."""
    try:
        return parse_filter_set(value)
    except FilterParseError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


class PermsearchCLI:
    def __init__(self, config: ScanConfig):
        self.config = config

    def _print_error(self, message: str):
        print_error(message)

    def show_config(self, base_meta: os.stat_result) -> None:
        """Print the active configuration before the scan starts."""
        status_print(f"Base directory: {self.config.base_dir!r}", "info")

        if not self.config.has_filters:
            # Announced, but never applied: without a filter nothing is in scope.
            status_print("Using gid and uid of base directory", "warning")
            status_print(f"Allowed: u{base_meta.st_uid} g{base_meta.st_gid}")
        else:
            if self.config.directory_filter is not None:
                for single_filter in self.config.directory_filter:
                    status_print(f"Allowed  (dir): {single_filter}")

            if self.config.file_filter is not None:
                for single_filter in self.config.file_filter:
                    status_print(f"Allowed (file): {single_filter}")

        console.print()

    def scan(self) -> int:
        """
        Run the scan described by the configuration.

        Returns:
            Process exit code: 0 when the walk completed, 1 when the base
            directory could not be read.
        """
        try:
            base_meta = os.stat(self.config.base_dir)
        except OSError as e:
            self._print_error(f"reading base directory {self.config.base_dir!r}: {e}")
            return 1

        if not self.config.silent:
            self.show_config(base_meta)

        walker = TreeWalker(
            directory_filter=self.config.directory_filter,
            file_filter=self.config.file_filter,
            ignore_symlinks=self.config.ignore_symlinks,
        )

        try:
            summary = walker.walk(self.config.base_dir)
        except OSError as e:
            self._print_error(f"reading base directory {self.config.base_dir!r}: {e}")
            return 1

        logger.info(
            f"{summary.violations} violation(s) in {summary.checked} checked entries, "
            f"{summary.errors} unreadable"
        )
        return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="permsearch",
        description="Simple search for finding mistakes in owner and permission settings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Filter syntax:
  A filter is a comma separated list of allowed combinations. Each combination
  may hold a permission pattern (rwx, '-' for unset, '*' for either) followed
  by u<uid> and/or g<gid> in any order.

Examples:
  permsearch -f 'rw-r--r--u0g0,rw-------u1000' /etc
  permsearch -d 'rwxr-xr-x,rwx------u1000g1000' -f 'rw*r--r--' /srv/www
  permsearch -s -i -d 'rwx***---g1000' /home/shared
        """,
    )
    parser.add_argument(
        "-d",
        "--directory-filter",
        type=filter_set_argument,
        help="List of allowed directory types",
    )
    parser.add_argument(
        "-f",
        "--file-filter",
        type=filter_set_argument,
        help="List of allowed file types",
    )
    parser.add_argument(
        "-s", "--silent", action="store_true", help="Remove active config from output"
    )
    parser.add_argument(
        "-i", "--ignore-symlinks", action="store_true", help="Ignores symlinks"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("base_dir", help="Base directory to work upon")
    return parser


def main(argv: list[str] | None = None) -> int:
    if os.name != "posix":
        print_error("This program only works on unixoid systems")
        return 1

    config = ScanConfig.from_args(build_parser().parse_args(argv))

    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    if not os.path.exists(config.base_dir):
        print_error(f"Base directory {config.base_dir!r} doesn't exist")
        return 1

    return PermsearchCLI(config).scan()


if __name__ == "__main__":
    sys.exit(main())
