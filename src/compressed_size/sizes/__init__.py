"""Build output discovery, measurement and size-mapping diffs."""

from .collect import compressed_size, discover_artifacts, measure_files, read_sizes
from .diff import diff_sizes
from .hashing import FilenameTransform, StripHashPatternError, strip_hash
from .matching import compile_glob, expand_braces, glob_matches
from .models import COMPRESSIONS, DEFAULT_EXCLUDE, DEFAULT_PATTERN, MeasuredFile, SizeConfig

__all__ = [
    "COMPRESSIONS",
    "DEFAULT_EXCLUDE",
    "DEFAULT_PATTERN",
    "FilenameTransform",
    "MeasuredFile",
    "SizeConfig",
    "StripHashPatternError",
    "compile_glob",
    "compressed_size",
    "diff_sizes",
    "discover_artifacts",
    "expand_braces",
    "glob_matches",
    "measure_files",
    "read_sizes",
    "strip_hash",
]
