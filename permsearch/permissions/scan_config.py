"""
Run configuration for a permission scan.
"""

import argparse
from dataclasses import dataclass

from .filters import FilterSet


@dataclass(frozen=True)
class ScanConfig:
    """Settings for one scan, fixed before the walk starts."""

    base_dir: str
    directory_filter: FilterSet | None = None
    file_filter: FilterSet | None = None
    silent: bool = False
    ignore_symlinks: bool = False
    verbose: bool = False

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "ScanConfig":
        return cls(
            base_dir=args.base_dir,
            directory_filter=args.directory_filter,
            file_filter=args.file_filter,
            silent=args.silent,
            ignore_symlinks=args.ignore_symlinks,
            verbose=getattr(args, "verbose", False),
        )

    @property
    def has_filters(self) -> bool:
        return self.directory_filter is not None or self.file_filter is not None
