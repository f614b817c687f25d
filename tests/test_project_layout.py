from __future__ import annotations

from pathlib import Path


def test_required_package_paths_exist() -> None:
    root = Path(__file__).resolve().parents[1]
    required = [
        "src/compressed_size/cli.py",
        "src/compressed_size/action.py",
        "src/compressed_size/config.py",
        "src/compressed_size/sizes/__init__.py",
        "src/compressed_size/report/__init__.py",
        "src/compressed_size/build/__init__.py",
        "src/compressed_size/github/__init__.py",
        "src/compressed_size/logging/__init__.py",
    ]
    for rel in required:
        assert (root / rel).exists(), rel
