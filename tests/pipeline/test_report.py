# tests/pipeline/test_report.py
from datetime import datetime

from func_input.parallel.partitioning import compute_partitions
from func_input.pipeline.report import (
    format_run_summary,
    log_run_summary,
    print_run_summary,
)


def _demo_kwargs():
    return dict(
        source_id=2,
        n=10,
        num_splits_hint=3,
        partitions=compute_partitions(10, 3),
        cache_location="/tmp/func_cache",
        workers=8,
        executor_name="processes",
        start_time=datetime(2025, 8, 18, 12, 34, 56),
    )


def test_format_run_summary_no_color_contains_key_fields():
    s = format_run_summary(color=False, **_demo_kwargs())
    assert "Start Time: 2025-08-18 12:34:56" in s
    assert "Source id:                  2" in s
    assert "Element count:              10" in s
    assert "Split hint:                 3" in s
    assert "Partitions:                 3" in s
    assert "Partition sizes:            3 to 4" in s
    assert "Distribution cache:         /tmp/func_cache" in s
    assert "Worker processes/threads:   8 (processes)" in s
    assert "\x1b[" not in s


def test_format_run_summary_color_includes_ansi():
    s = format_run_summary(color=True, **_demo_kwargs())
    assert "\x1b[31m" in s
    assert "\x1b[4m" in s


def test_empty_source_summary():
    s = format_run_summary(color=False, **(_demo_kwargs() | {"n": 0, "partitions": []}))
    assert "Partitions:                 0" in s
    assert "Partition sizes:            n/a" in s


def test_long_cache_location_truncated():
    long_path = "/data/" + ("x" * 200)
    s = format_run_summary(color=False, **(_demo_kwargs() | {"cache_location": long_path}))
    assert "…" in s
    assert long_path not in s


def test_log_run_summary_emits_info(caplog):
    caplog.set_level("INFO")
    log_run_summary(**_demo_kwargs())
    messages = [rec.getMessage() for rec in caplog.records]
    assert any("Function Source Configuration" in m for m in messages)
    assert any("Element count:              10" in m for m in messages)


def test_print_run_summary_writes_to_stdout(capfd):
    print_run_summary(color=False, **_demo_kwargs())
    out, _ = capfd.readouterr()
    assert "Function Source Configuration" in out
