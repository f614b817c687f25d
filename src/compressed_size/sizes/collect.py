"""Deterministic discovery and compressed-size measurement of build outputs."""

from __future__ import annotations

import gzip
import os
from pathlib import Path

import brotli

from compressed_size.sizes.hashing import FilenameTransform, strip_hash
from compressed_size.sizes.matching import glob_matches, pruned_dir_names
from compressed_size.sizes.models import COMPRESSIONS, MeasuredFile, SizeConfig

GZIP_LEVEL = 9


def compressed_size(data: bytes, compression: str) -> int:
    """Return the byte length of `data` after applying `compression`."""
    if compression == "gzip":
        return len(gzip.compress(data, compresslevel=GZIP_LEVEL, mtime=0))
    if compression == "brotli":
        return len(brotli.compress(data))
    if compression == "none":
        return len(data)
    raise ValueError(f"Unsupported compression '{compression}'; expected one of {COMPRESSIONS}.")


def discover_artifacts(root: Path, config: SizeConfig) -> list[str]:
    """Return sorted POSIX paths under `root` matching the pattern and not the exclude."""
    resolved = root.resolve()
    pruned = pruned_dir_names(config.exclude)
    output: list[str] = []
    for current, dir_names, file_names in os.walk(resolved):
        dir_names[:] = sorted(name for name in dir_names if name not in pruned)
        relative_dir = Path(current).relative_to(resolved)
        for file_name in file_names:
            relative = (relative_dir / file_name).as_posix()
            if not glob_matches(relative, config.pattern):
                continue
            if glob_matches(relative, config.exclude, dot=True):
                continue
            output.append(relative)
    output.sort()
    return output


def measure_files(
    root: Path,
    config: SizeConfig,
    normalize: FilenameTransform | None = None,
) -> list[MeasuredFile]:
    """Measure every discovered artifact, keyed by its normalized filename."""
    resolved = root.resolve()
    measured: list[MeasuredFile] = []
    for relative in discover_artifacts(resolved, config):
        data = (resolved / relative).read_bytes()
        measured.append(
            MeasuredFile(
                path=relative,
                key=normalize(relative) if normalize is not None else relative,
                size=compressed_size(data, config.compression),
            )
        )
    return measured


def read_sizes(
    root: Path,
    config: SizeConfig,
    warnings: list[str] | None = None,
) -> dict[str, int]:
    """Collect a size mapping (normalized filename -> compressed bytes) for one build."""
    sizes: dict[str, int] = {}
    for item in measure_files(root, config, normalize=strip_hash(config.strip_hash)):
        if item.key in sizes and warnings is not None:
            warnings.append(
                f"'{item.path}' normalizes to '{item.key}', replacing an earlier file "
                "with the same name."
            )
        sizes[item.key] = item.size
    return sizes
