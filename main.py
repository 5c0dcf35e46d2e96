"""
Precedence Scheduler - command line entry point.
Precedence Scheduler —— 命令行入口。

Reads precedence instructions (from a file or stdin), then prints:
  1. the deterministic topological order
  2. the timed schedule on a fixed worker pool, with its makespan
  3. the critical path through the graph

读取先后约束指令（来自文件或标准输入），然后输出：
  1. 确定性的拓扑顺序
  2. 固定工作者池上的定时调度结果及总工期
  3. 图中的关键路径

Usage / 用法:
    python main.py input.txt --workers 5 --base-offset 61
    cat input.txt | python main.py --trace -v
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

import config
from dag import (
    DependencyGraph,
    SchedulingError,
    WorkerPoolScheduler,
    critical_path,
    letter_duration,
    order_string,
    topological_order,
)
from parsing import parse_edges
from schema import ScheduleResult

console = Console()


# ======================================================================
# UI Event Handler - prints simulation events
# UI 事件处理器 —— 打印模拟事件
# ======================================================================

def on_event(event: str, data: Any) -> None:
    """
    Handle events from WorkerPoolScheduler and display them (--trace).
    处理来自 WorkerPoolScheduler 的事件并在控制台展示（--trace 模式）。
    """
    if event == "dispatch":
        console.print(
            f"  [yellow]t={data['start']:>5}[/yellow] >> {data['task']} "
            f"[dim](until t={data['finish']}, {data['busy']} busy)[/dim]"
        )

    elif event == "complete":
        unlocked = ", ".join(str(t) for t in data["unlocked"]) or "-"
        console.print(
            f"  [green]t={data['time']:>5}[/green] << {data['task']} "
            f"[dim]unlocked: {unlocked}[/dim]"
        )


def _schedule_table(result: ScheduleResult) -> Table:
    table = Table(title=f"Schedule ({result.worker_count} workers)", border_style="cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Task", style="cyan")
    table.add_column("Start", justify="right")
    table.add_column("Finish", justify="right", style="green")
    table.add_column("Duration", justify="right", style="dim")
    for i, entry in enumerate(result.entries, start=1):
        table.add_row(str(i), str(entry.task), str(entry.start_time), str(entry.finish_time), str(entry.duration))
    return table


# ======================================================================
# Main
# 主函数
# ======================================================================

def setup_logging(verbose: bool = False) -> None:
    """
    Configure logging with rich handler.
    使用 Rich 处理器配置日志系统。
    verbose=True 时启用 DEBUG 级别，显示每个派发与完成事件的调试信息。
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, rich_tracebacks=True)],
    )


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Order and schedule precedence-constrained steps.")
    ap.add_argument("input", nargs="?", help="Instruction file (default: stdin)")
    ap.add_argument("-w", "--workers", type=int, default=config.SCHEDULER_WORKERS,
                    help=f"Simulated worker count (default: {config.SCHEDULER_WORKERS})")
    ap.add_argument("-b", "--base-offset", type=int, default=config.DURATION_BASE_OFFSET,
                    help=f"Duration of step A (default: {config.DURATION_BASE_OFFSET})")
    ap.add_argument("--trace", action="store_true", help="Print every dispatch / completion event")
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return ap


def run(text: str, workers: int, base_offset: int, trace: bool = False) -> ScheduleResult:
    """
    Parse `text`, print the order, schedule and critical path.
    解析 `text`，依次输出拓扑顺序、调度结果和关键路径。
    """
    graph = DependencyGraph.build(parse_edges(text))
    duration = letter_duration(base_offset)

    order = topological_order(graph)
    console.print(Panel(f"[bold]{order_string(order)}[/bold]", title="[bold blue]Order[/bold blue]",
                        border_style="blue"))

    if trace:
        console.print("\n[bold cyan]>>> Simulating...[/bold cyan]")
    scheduler = WorkerPoolScheduler(
        duration=duration,
        worker_count=workers,
        on_event=on_event if trace else None,
    )
    result = scheduler.run(graph)
    console.print(_schedule_table(result))

    length, path = critical_path(graph, duration)
    console.print(Panel(
        f"Makespan: [bold green]{result.makespan}[/bold green]\n"
        f"Critical path: {' -> '.join(str(t) for t in path)} [dim](length {length})[/dim]",
        title="[bold green]Result[/bold green]",
        border_style="green",
    ))
    return result


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        if args.input:
            with open(args.input, encoding="utf-8") as fh:
                text = fh.read()
        else:
            text = sys.stdin.read()
        run(text, workers=args.workers, base_offset=args.base_offset, trace=args.trace)
    except (SchedulingError, ValueError, OSError) as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
