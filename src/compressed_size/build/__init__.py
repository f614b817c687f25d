"""Revision build orchestration."""

from .packages import PackageManager, detect_package_manager, is_yarn_berry, uses_plug_n_play
from .revision import build_revision, checkout_base, clean_revision
from .runner import CommandError, CommandRunner, split_command

__all__ = [
    "CommandError",
    "CommandRunner",
    "PackageManager",
    "build_revision",
    "checkout_base",
    "clean_revision",
    "detect_package_manager",
    "is_yarn_berry",
    "split_command",
    "uses_plug_n_play",
]
