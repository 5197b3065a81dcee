# logger/run_summary.py
"""
Per-run OK/FAIL accounting and the end-of-run summary table.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from rich import box
from rich.console import Console
from rich.table import Table


@dataclass
class RunStats:
    """
    Counters for one ingestion run.
    """

    name: str
    ok: int = 0
    fail: int = 0
    skipped: int = 0
    totals: Dict[str, int] = field(default_factory=dict)
    failures: List[str] = field(default_factory=list)

    def add(self, key: str, amount: int = 1) -> None:
        self.totals[key] = self.totals.get(key, 0) + amount

    def record_failure(self, unit: str, error: Exception) -> None:
        self.fail += 1
        self.failures.append(f"{unit}: {error}")

    @property
    def processed(self) -> int:
        return self.ok + self.fail + self.skipped


def render_run_summary(
    stats: RunStats,
    logger: logging.Logger,
    console: Optional[Console] = None,
    max_failures_shown: int = 10,
) -> None:
    """
    Log the summary line and print the rich summary table.

    Args:
        stats: Counters collected during the run
        logger: Logger receiving the ``Done.`` line
        console: Rich console, a stderr console when omitted
        max_failures_shown: Failure messages listed under the table
    """
    logger.info("Done. OK=%d FAIL=%d", stats.ok, stats.fail)

    console = console or Console(stderr=True)
    table = Table(
        title=stats.name,
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", justify="right", style="green")

    table.add_row("OK", str(stats.ok))
    table.add_row("FAIL", str(stats.fail), style="red" if stats.fail else None)
    if stats.skipped:
        table.add_row("Skipped", str(stats.skipped))
    for key in sorted(stats.totals):
        table.add_row(key, f"{stats.totals[key]:,}")

    console.print(table)

    for line in stats.failures[:max_failures_shown]:
        console.print(f"[red]x[/red] {line}")
    if len(stats.failures) > max_failures_shown:
        console.print(f"... {len(stats.failures) - max_failures_shown} more failures")
