"""Configuration loading and deterministic merge order."""

from __future__ import annotations

import re
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from compressed_size.report import ReportConfig, SortOrder, resolve_sort_order
from compressed_size.sizes import COMPRESSIONS, SizeConfig, strip_hash

CONFIG_FILENAME = "compressed-size.toml"
DATA_DIR_NAME = ".compressed_size"

DEFAULT_BUILD_SCRIPT = "build"

_TRUE_PATTERN = re.compile(r"^(1|true|yes)$", re.IGNORECASE)


@dataclass(slots=True, frozen=True)
class BuildConfig:
    """Scripts used to install, build and clean one revision."""

    build_script: str = DEFAULT_BUILD_SCRIPT
    install_script: str | None = None
    clean_script: str | None = None


@dataclass(slots=True, frozen=True)
class CommentConfig:
    """Where and how the report is published."""

    comment_key: str | None = None
    use_check: bool = False


@dataclass(slots=True, frozen=True)
class ActionConfig:
    """Fully merged run configuration."""

    repo_root: Path
    data_dir: Path
    sizes: SizeConfig
    report: ReportConfig
    build: BuildConfig
    comment: CommentConfig
    warnings: tuple[str, ...] = ()

    def to_public_dict(self) -> dict[str, object]:
        """Return serializable config snapshot for logs."""
        return {
            "repo_root": str(self.repo_root),
            "data_dir": str(self.data_dir),
            "sizes": {
                "pattern": self.sizes.pattern,
                "exclude": self.sizes.exclude,
                "compression": self.sizes.compression,
                "strip_hash": self.sizes.strip_hash,
            },
            "report": {
                "show_total": self.report.show_total,
                "collapse_unchanged": self.report.collapse_unchanged,
                "omit_unchanged": self.report.omit_unchanged,
                "minimum_change_threshold": self.report.minimum_change_threshold,
                "order_by": str(self.report.sort_order),
            },
            "build": {
                "build_script": self.build.build_script,
                "install_script": self.build.install_script,
                "clean_script": self.build.clean_script,
            },
            "comment": {
                "comment_key": self.comment.comment_key,
                "use_check": self.comment.use_check,
            },
            "warnings": list(self.warnings),
        }


@dataclass(slots=True, frozen=True)
class ActionOverrides:
    """Optional action inputs or CLI flags applied at highest precedence."""

    data_dir: Path | None = None
    pattern: str | None = None
    exclude: str | None = None
    compression: str | None = None
    strip_hash: str | None = None
    build_script: str | None = None
    install_script: str | None = None
    clean_script: str | None = None
    minimum_change_threshold: int | None = None
    show_total: bool | None = None
    collapse_unchanged: bool | None = None
    omit_unchanged: bool | None = None
    order_by: str | None = None
    comment_key: str | None = None
    use_check: bool | None = None


def to_bool(value: str) -> bool:
    """Convert a `1`/`true`/`yes` input value to a boolean."""
    return _TRUE_PATTERN.match(value.strip()) is not None


def default_config(repo_root: Path) -> ActionConfig:
    """Build default config for a given repository root."""
    resolved_root = repo_root.resolve()
    return ActionConfig(
        repo_root=resolved_root,
        data_dir=resolved_root / DATA_DIR_NAME,
        sizes=SizeConfig(),
        report=ReportConfig(),
        build=BuildConfig(),
        comment=CommentConfig(),
    )


def load_repo_config_file(repo_root: Path) -> dict[str, object]:
    """Load optional compressed-size.toml from repo root."""
    config_path = repo_root / CONFIG_FILENAME
    if not config_path.exists():
        return {}
    with config_path.open("rb") as handle:
        payload = tomllib.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"{CONFIG_FILENAME} must contain a top-level table.")
    return payload


def inputs_from_env(environ: Mapping[str, str]) -> ActionOverrides:
    """Read action inputs from `INPUT_<NAME>` environment variables."""

    def read(name: str) -> str | None:
        value = environ.get(f"INPUT_{name.upper()}", "").strip()
        return value or None

    def read_bool(name: str) -> bool | None:
        value = read(name)
        return None if value is None else to_bool(value)

    threshold: int | None = None
    raw_threshold = read("minimum-change-threshold")
    if raw_threshold is not None:
        try:
            threshold = int(raw_threshold, 10)
        except ValueError as error:
            raise ValueError(
                "Config field 'minimum-change-threshold' must be a non-negative integer."
            ) from error

    return ActionOverrides(
        pattern=read("pattern"),
        exclude=read("exclude"),
        compression=read("compression"),
        strip_hash=read("strip-hash"),
        build_script=read("build-script"),
        install_script=read("install-script"),
        clean_script=read("clean-script"),
        minimum_change_threshold=threshold,
        show_total=read_bool("show-total"),
        collapse_unchanged=read_bool("collapse-unchanged"),
        omit_unchanged=read_bool("omit-unchanged"),
        order_by=read("order-by"),
        comment_key=read("comment-key"),
        use_check=read_bool("use-check"),
    )


def _get_table(payload: dict[str, object], key: str) -> dict[str, object]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a table.")
    return value


def _optional_str(value: object, name: str, default: str | None) -> str | None:
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValueError(f"Config field '{name}' must be a string.")
    return value or default


def _required_str(value: object, name: str, default: str) -> str:
    result = _optional_str(value, name, default)
    return default if result is None else result


def _optional_bool(value: object, name: str, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValueError(f"Config field '{name}' must be a boolean.")
    return value


def _optional_non_negative_int(value: object, name: str, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"Config field '{name}' must be a non-negative integer.")
    return value


def _validated_compression(value: str, name: str) -> str:
    if value not in COMPRESSIONS:
        raise ValueError(f"Config field '{name}' must be one of: {', '.join(COMPRESSIONS)}.")
    return value


def _layer(
    base: ActionConfig,
    values: Mapping[str, Mapping[str, object]],
    source: str,
) -> ActionConfig:
    """Apply one precedence layer of section -> field values onto `base`."""
    sizes_values = values.get("sizes", {})
    report_values = values.get("report", {})
    build_values = values.get("build", {})
    comment_values = values.get("comment", {})
    warnings = list(base.warnings)

    def name(section: str, key: str) -> str:
        return f"{source}{section}.{key}" if source else f"{section}.{key}"

    strip_pattern = _optional_str(
        sizes_values.get("strip_hash"), name("sizes", "strip_hash"), base.sizes.strip_hash
    )
    # Compile now so an invalid pattern fails setup instead of the first measurement.
    strip_hash(strip_pattern)
    sizes = SizeConfig(
        pattern=_required_str(
            sizes_values.get("pattern"), name("sizes", "pattern"), base.sizes.pattern
        ),
        exclude=_required_str(
            sizes_values.get("exclude"), name("sizes", "exclude"), base.sizes.exclude
        ),
        compression=_validated_compression(
            _required_str(
                sizes_values.get("compression"),
                name("sizes", "compression"),
                base.sizes.compression,
            ),
            name("sizes", "compression"),
        ),
        strip_hash=strip_pattern,
    )

    sort_order: SortOrder = base.report.sort_order
    raw_order = _optional_str(report_values.get("order_by"), name("report", "order_by"), None)
    if raw_order is not None:
        sort_order, warning = resolve_sort_order(raw_order)
        if warning is not None:
            warnings.append(warning)
    report = ReportConfig(
        show_total=_optional_bool(
            report_values.get("show_total"), name("report", "show_total"), base.report.show_total
        ),
        collapse_unchanged=_optional_bool(
            report_values.get("collapse_unchanged"),
            name("report", "collapse_unchanged"),
            base.report.collapse_unchanged,
        ),
        omit_unchanged=_optional_bool(
            report_values.get("omit_unchanged"),
            name("report", "omit_unchanged"),
            base.report.omit_unchanged,
        ),
        minimum_change_threshold=_optional_non_negative_int(
            report_values.get("minimum_change_threshold"),
            name("report", "minimum_change_threshold"),
            base.report.minimum_change_threshold,
        ),
        sort_order=sort_order,
    )

    build = BuildConfig(
        build_script=_required_str(
            build_values.get("build_script"),
            name("build", "build_script"),
            base.build.build_script,
        ),
        install_script=_optional_str(
            build_values.get("install_script"),
            name("build", "install_script"),
            base.build.install_script,
        ),
        clean_script=_optional_str(
            build_values.get("clean_script"),
            name("build", "clean_script"),
            base.build.clean_script,
        ),
    )
    comment = CommentConfig(
        comment_key=_optional_str(
            comment_values.get("comment_key"),
            name("comment", "comment_key"),
            base.comment.comment_key,
        ),
        use_check=_optional_bool(
            comment_values.get("use_check"), name("comment", "use_check"), base.comment.use_check
        ),
    )
    return ActionConfig(
        repo_root=base.repo_root,
        data_dir=base.data_dir,
        sizes=sizes,
        report=report,
        build=build,
        comment=comment,
        warnings=tuple(warnings),
    )


def merge_config(
    base: ActionConfig, repo_payload: dict[str, object], overrides: ActionOverrides
) -> ActionConfig:
    """Merge defaults, repo config, then action inputs/CLI overrides."""
    sections = {
        section: _get_table(repo_payload, section)
        for section in ("sizes", "report", "build", "comment")
    }
    merged = _layer(base, sections, source="")
    return apply_overrides(merged, overrides)


def apply_overrides(config: ActionConfig, overrides: ActionOverrides) -> ActionConfig:
    """Apply action inputs or CLI flags at highest precedence."""
    sections: dict[str, dict[str, object]] = {
        "sizes": {
            "pattern": overrides.pattern,
            "exclude": overrides.exclude,
            "compression": overrides.compression,
            "strip_hash": overrides.strip_hash,
        },
        "report": {
            "show_total": overrides.show_total,
            "collapse_unchanged": overrides.collapse_unchanged,
            "omit_unchanged": overrides.omit_unchanged,
            "minimum_change_threshold": overrides.minimum_change_threshold,
            "order_by": overrides.order_by,
        },
        "build": {
            "build_script": overrides.build_script,
            "install_script": overrides.install_script,
            "clean_script": overrides.clean_script,
        },
        "comment": {
            "comment_key": overrides.comment_key,
            "use_check": overrides.use_check,
        },
    }
    layered = _layer(config, sections, source="overrides.")
    data_dir = overrides.data_dir or config.data_dir
    return ActionConfig(
        repo_root=layered.repo_root,
        data_dir=data_dir.resolve(),
        sizes=layered.sizes,
        report=layered.report,
        build=layered.build,
        comment=layered.comment,
        warnings=layered.warnings,
    )


def load_effective_config(
    repo_root: Path, overrides: ActionOverrides | None = None
) -> ActionConfig:
    """Load effective config using merge order defaults -> repo config -> overrides."""
    resolved_root = repo_root.resolve()
    base = default_config(resolved_root)
    payload = load_repo_config_file(resolved_root)
    return merge_config(base, payload, overrides or ActionOverrides())
