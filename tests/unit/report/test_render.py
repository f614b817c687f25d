from __future__ import annotations

import dataclasses

from compressed_size.report import FileSizeRecord, ReportConfig, render_console, render_report

FILES = [
    FileSizeRecord(filename="one.js", size=5000, delta=2500),
    FileSizeRecord(filename="two.js", size=5000, delta=-2500),
    FileSizeRecord(filename="three.js", size=300, delta=0),
    FileSizeRecord(filename="four.js", size=4500, delta=9),
]
DEFAULTS = ReportConfig(
    show_total=True,
    collapse_unchanged=True,
    omit_unchanged=False,
    minimum_change_threshold=1,
)


def _with(**changes: object) -> ReportConfig:
    return dataclasses.replace(DEFAULTS, **changes)


def test_default_report_collapses_unchanged_rows() -> None:
    expected = "\n".join(
        [
            "**Size Change:** +9 B (+0.06%)",
            "",
            "**Total Size:** 14.8 kB",
            "",
            "| Filename | Size | Change |  |",
            "| :--- | :---: | :---: | :---: |",
            "| `four.js` | 4.5 kB | +9 B (+0.2%) |  |",
            "| `one.js` | 5 kB | +2.5 kB (+100%) | 🆘 |",
            "| `two.js` | 5 kB | -2.5 kB (-33.33%) | 🎉 |",
            "",
            "<details><summary>ℹ️ <strong>View Unchanged</strong></summary>",
            "",
            "| Filename | Size |",
            "| :--- | :---: |",
            "| `three.js` | 300 B |",
            "",
            "</details>",
        ]
    )
    assert render_report(FILES, DEFAULTS) == expected


def test_report_without_total_starts_with_table() -> None:
    rendered = render_report(FILES, _with(show_total=False))
    assert rendered.startswith("| Filename | Size | Change |  |\n")
    assert "**Total Size:**" not in rendered
    assert "**Size Change:**" not in rendered


def test_report_without_collapse_keeps_unchanged_rows_in_main_table() -> None:
    rendered = render_report(FILES, _with(collapse_unchanged=False))
    assert "<details>" not in rendered
    assert "| `three.js` | 300 B | 0 B |  |" in rendered
    table_rows = [line for line in rendered.splitlines() if line.startswith("| `")]
    assert [row.split("`")[1] for row in table_rows] == [
        "four.js",
        "one.js",
        "three.js",
        "two.js",
    ]


def test_omit_unchanged_drops_rows_from_both_sections() -> None:
    rendered = render_report(FILES, _with(omit_unchanged=True))
    assert "three.js" not in rendered
    assert "<details>" not in rendered
    assert "**Total Size:** 14.8 kB" in rendered


def test_threshold_moves_small_changes_into_unchanged_block() -> None:
    rendered = render_report(FILES, _with(minimum_change_threshold=10))
    main, _, collapsed = rendered.partition("<details>")
    assert "four.js" not in main
    assert "| Filename | Size | Change |" in collapsed
    assert "| `four.js` | 4.5 kB | +9 B (+0.2%) |" in collapsed
    assert "| `three.js` | 300 B | 0 B |" in collapsed
    assert "| `one.js` | 5 kB | +2.5 kB (+100%) | 🆘 |" in main


def test_delta_equal_to_threshold_counts_as_changed() -> None:
    rendered = render_report(FILES, _with(minimum_change_threshold=9))
    main, _, collapsed = rendered.partition("<details>")
    assert "four.js" in main
    assert "four.js" not in collapsed


def test_all_unchanged_records_render_only_collapsed_block() -> None:
    unchanged = [dataclasses.replace(item, delta=0) for item in FILES]
    expected = "\n".join(
        [
            "**Size Change:** 0 B",
            "",
            "**Total Size:** 14.8 kB",
            "",
            "<details><summary>ℹ️ <strong>View Unchanged</strong></summary>",
            "",
            "| Filename | Size |",
            "| :--- | :---: |",
            "| `four.js` | 4.5 kB |",
            "| `one.js` | 5 kB |",
            "| `three.js` | 300 B |",
            "| `two.js` | 5 kB |",
            "",
            "</details>",
        ]
    )
    assert render_report(unchanged, DEFAULTS) == expected


def test_single_unchanged_record() -> None:
    rendered = render_report([FILES[2]], DEFAULTS)
    assert rendered.startswith("**Size Change:** 0 B\n\n**Total Size:** 300 B\n\n<details>")
    assert "| `three.js` | 300 B |" in rendered


def test_zero_change_column_is_dropped_from_main_table() -> None:
    records = [
        FileSizeRecord(filename="a.js", size=100, delta=0),
        FileSizeRecord(filename="b.js", size=200, delta=0),
    ]
    rendered = render_report(records, _with(show_total=False, collapse_unchanged=False))
    assert rendered == "\n".join(
        [
            "| Filename | Size |",
            "| :--- | :---: |",
            "| `a.js` | 100 B |",
            "| `b.js` | 200 B |",
        ]
    )


def test_empty_icon_column_is_dropped_but_change_kept() -> None:
    records = [FileSizeRecord(filename="a.js", size=1001, delta=1)]
    rendered = render_report(records, _with(show_total=False))
    assert rendered.splitlines()[0] == "| Filename | Size | Change |"
    assert rendered.splitlines()[2] == "| `a.js` | 1 kB | +1 B (+0.1%) |"


def test_zero_records_render_totals_only() -> None:
    assert render_report([], DEFAULTS) == "**Size Change:** 0 B\n\n**Total Size:** 0 B"
    assert render_report([], _with(show_total=False)) == ""


def test_totals_cover_omitted_records() -> None:
    records = [
        FileSizeRecord(filename="big.js", size=10_000, delta=5_000),
        FileSizeRecord(filename="same.js", size=10_000, delta=0),
    ]
    rendered = render_report(records, _with(omit_unchanged=True))
    assert "**Total Size:** 20 kB" in rendered
    assert "**Size Change:** +5 kB (+33.33%) 🚨" in rendered


def test_new_and_removed_files() -> None:
    records = [
        FileSizeRecord(filename="added.js", size=210, delta=210),
        FileSizeRecord(filename="gone.js", size=0, delta=-1200),
    ]
    rendered = render_report(records, _with(show_total=False))
    assert "| `added.js` | 210 B | +210 B (new file) | 🆕 |" in rendered
    assert "| `gone.js` | 0 B | -1.2 kB (removed) | 🏆 |" in rendered


def test_render_is_deterministic() -> None:
    first = render_report(FILES, DEFAULTS)
    second = render_report(list(reversed(FILES)), DEFAULTS)
    assert first == render_report(FILES, DEFAULTS)
    assert first == second


def test_empty_file_present_in_both_builds_has_no_icon() -> None:
    records = [FileSizeRecord(filename="empty.js", size=0, delta=0)]
    rendered = render_report(records, _with(show_total=False, collapse_unchanged=False))
    assert rendered == "\n".join(
        [
            "| Filename | Size |",
            "| :--- | :---: |",
            "| `empty.js` | 0 B |",
        ]
    )
    assert render_console(records) == "empty.js  0 B  0 B"
