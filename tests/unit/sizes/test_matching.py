from __future__ import annotations

from compressed_size.sizes import DEFAULT_EXCLUDE, DEFAULT_PATTERN, expand_braces, glob_matches
from compressed_size.sizes.matching import pruned_dir_names


def test_expand_braces_in_source_order() -> None:
    assert expand_braces("*.{js,mjs,cjs}") == ["*.js", "*.mjs", "*.cjs"]
    assert expand_braces("{a,b}/{c,d}") == ["a/c", "a/d", "b/c", "b/d"]
    assert expand_braces("{a,{b,c}}.js") == ["a.js", "b.js", "c.js"]
    assert expand_braces("plain.js") == ["plain.js"]
    assert expand_braces("{single}.js") == ["{single}.js"]


def test_default_pattern_matches_dist_outputs_anywhere() -> None:
    assert glob_matches("dist/index.js", DEFAULT_PATTERN)
    assert glob_matches("packages/core/dist/esm/index.mjs", DEFAULT_PATTERN)
    assert glob_matches("dist/index.cjs", DEFAULT_PATTERN)
    assert not glob_matches("src/index.js", DEFAULT_PATTERN)
    assert not glob_matches("dist/index.css", DEFAULT_PATTERN)
    assert not glob_matches("distribution/index.js", DEFAULT_PATTERN)


def test_default_exclude_matches_maps_and_dependencies() -> None:
    assert glob_matches("dist/index.js.map", DEFAULT_EXCLUDE)
    assert glob_matches("node_modules/lib/dist/index.js", DEFAULT_EXCLUDE)
    assert glob_matches("packages/a/node_modules/x.js", DEFAULT_EXCLUDE)
    assert not glob_matches("dist/index.js", DEFAULT_EXCLUDE)


def test_single_star_stays_within_segment() -> None:
    assert glob_matches("dist/a.js", "dist/*.js")
    assert not glob_matches("dist/nested/a.js", "dist/*.js")
    assert glob_matches("dist/a1.js", "dist/a?.js")
    assert not glob_matches("dist/a/.js", "dist/a?.js")


def test_character_classes() -> None:
    assert glob_matches("dist/a.js", "dist/[ab].js")
    assert not glob_matches("dist/c.js", "dist/[ab].js")
    assert glob_matches("dist/c.js", "dist/[!ab].js")


def test_pruned_dir_names_from_exclude() -> None:
    assert pruned_dir_names(DEFAULT_EXCLUDE) == {"node_modules"}
    assert pruned_dir_names("**/*.map") == set()


def test_wildcards_skip_dot_segments() -> None:
    assert not glob_matches("dist/.cache/x.js", DEFAULT_PATTERN)
    assert not glob_matches(".next/dist/x.js", DEFAULT_PATTERN)
    assert not glob_matches("dist/.hidden.js", "dist/*.js")
    assert not glob_matches("dist/.a.js", "dist/?a.js")
    assert not glob_matches("dist/.cache/x.js", "dist/**")
    assert glob_matches("dist/nested/x.js", "dist/**")


def test_literal_dot_in_glob_matches_dot_segments() -> None:
    assert glob_matches("dist/.cache/x.js", "dist/.cache/*.js")
    assert glob_matches("dist/.hidden.js", "dist/.*.js")


def test_dot_option_lets_wildcards_match_dot_segments() -> None:
    assert glob_matches("dist/.cache/x.js", DEFAULT_PATTERN, dot=True)
    assert glob_matches(".yarn/cache/x.js.map", DEFAULT_EXCLUDE, dot=True)
