import logging
import os
from collections import defaultdict

import pytest
from rich.console import Console
from rich.table import Table

OUTCOMES = ("passed", "failed", "skipped")


def _registered_markers(config) -> set[str]:
    """Marker names declared under [tool.pytest.ini_options] markers."""
    return {line.split(":", 1)[0].strip() for line in config.getini("markers")}


def _collect_marker_stats(terminalreporter, markers: set[str]) -> dict[str, dict[str, float]]:
    stats: dict[str, dict[str, float]] = defaultdict(
        lambda: {"total": 0, "duration": 0.0, **{outcome: 0 for outcome in OUTCOMES}}
    )
    for outcome in OUTCOMES:
        for report in terminalreporter.stats.get(outcome, []):
            # Count the call phase, plus tests skipped during setup.
            if report.when != "call" and not (report.when == "setup" and report.skipped):
                continue
            for marker in markers.intersection(report.keywords):
                entry = stats[marker]
                entry[outcome] += 1
                entry["total"] += 1
                entry["duration"] += getattr(report, "duration", 0.0)
    return stats


def pytest_terminal_summary(terminalreporter, exitstatus, config):
    """Print per-marker test statistics at the end of the session."""
    _ = exitstatus
    stats = _collect_marker_stats(terminalreporter, _registered_markers(config))
    if not stats:
        return

    table = Table(title="Test Statistics by Marker", show_header=True, header_style="bold magenta")
    table.add_column("Marker", style="cyan")
    table.add_column("Total", justify="right")
    table.add_column("Passed", justify="right", style="green")
    table.add_column("Failed", justify="right", style="red")
    table.add_column("Skipped", justify="right", style="yellow")
    table.add_column("Duration (s)", justify="right", style="blue")

    for marker, entry in sorted(stats.items()):
        table.add_row(
            marker,
            *(str(int(entry[key])) for key in ("total", *OUTCOMES)),
            f"{entry['duration']:.2f}",
        )

    console = Console()
    console.print("\n")
    console.print(table)


@pytest.fixture(autouse=True)
def _isolate_pb_env(monkeypatch):
    """Keep PB_* settings from the calling shell out of the tests."""
    for name in list(os.environ):
        if name.startswith("PB_"):
            monkeypatch.delenv(name)


@pytest.fixture
def restore_root_logging():
    """Put the root logger back the way the test found it."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
