"""
Worker-Pool Scheduler - discrete-event simulation of a DependencyGraph on a
fixed number of identical workers.
工作者池调度器 —— 在固定数量的相同工作者上对 DependencyGraph 做离散事件模拟。

There is no real parallelism here: workers are a modelled capacity and time
is a virtual integer clock. Each iteration of the main loop is one event:

  1. Fill     - while a worker is idle and a task is ready, dispatch the
                smallest ready id as (clock + cost(id), id)
  2. Advance  - jump the clock to the earliest busy slot, ties broken by
                smallest task id
  3. Complete - free that slot, record (id, clock), release its dependents
  4. Repeat until nothing is ready and every worker is idle

这里没有真正的并行：工作者只是被建模的容量，时间是虚拟整数时钟。
主循环每次迭代处理一个事件：

  1. 填充 - 有空闲工作者且有就绪任务时，派发 ID 最小的就绪任务，
            占用槽位 (clock + cost(id), id)
  2. 推进 - 将时钟拨到最早结束的忙碌槽位（并列时取任务 ID 最小者）
  3. 完成 - 释放该槽位，记录 (id, clock)，解锁其后继任务
  4. 重复，直到没有就绪任务且所有工作者空闲

Completions are handled one at a time. When two slots finish at the same
virtual time, the dependents released by the first one can be dispatched by
the next Fill before the second completion is processed.
完成事件逐个处理：两个槽位同一时刻结束时，第一个完成所解锁的后继
可能在第二个完成被处理之前，就已在下一次「填充」中被派发。
"""

from __future__ import annotations

import heapq
import logging
from typing import Any, Callable

import config
from dag.duration import DurationPolicy, letter_duration, resolve_duration
from dag.graph import CycleDetectedError, DependencyGraph
from dag.ready_set import ReadySet, release
from schema import ScheduleEntry, ScheduleResult, TaskId

logger = logging.getLogger(__name__)


class WorkerPoolScheduler:
    """
    Simulates executing a DependencyGraph with `worker_count` workers.
    模拟用 `worker_count` 个工作者执行 DependencyGraph。

    Each `run()` builds its own in-degree table, ready set and slot heap, so
    one scheduler instance can be reused across graphs.
    每次 `run()` 都构建独立的入度表、就绪集合与槽位堆，同一实例可复用于多个图。
    """

    def __init__(
        self,
        duration: DurationPolicy | None = None,
        worker_count: int | None = None,
        strict: bool | None = None,
        on_event: Callable[[str, Any], None] | None = None,
    ):
        self._duration = duration or letter_duration()                         # 任务耗时策略
        self._worker_count = config.SCHEDULER_WORKERS if worker_count is None else worker_count
        self._strict = config.FAIL_ON_CYCLE if strict is None else strict      # 遇到环时是否抛出异常
        self._emit = on_event or (lambda *_: None)                             # 事件回调（用于 UI 实时输出）

        if self._worker_count < 1:
            raise ValueError(f"worker_count must be at least 1, got {self._worker_count}")

    @property
    def worker_count(self) -> int:
        return self._worker_count

    # ------------------------------------------------------------------
    # Main simulation loop
    # 主模拟循环
    # ------------------------------------------------------------------

    def run(self, graph: DependencyGraph) -> ScheduleResult:
        """
        Run the simulation and return the schedule in completion order.
        运行模拟，返回按完成顺序排列的调度结果。
        """
        in_degree = graph.in_degrees()
        ready = ReadySet.from_in_degrees(in_degree)
        busy: list[tuple[int, TaskId]] = []    # (finish_time, task_id) 小顶堆
        started: dict[TaskId, int] = {}
        result = ScheduleResult(worker_count=self._worker_count)
        clock = 0

        while ready or busy:
            # --- Fill: dispatch ready tasks onto idle workers ---
            # --- 填充：把就绪任务派发给空闲工作者 ---
            while ready and len(busy) < self._worker_count:
                task = ready.pop()
                finish = clock + resolve_duration(self._duration, task)
                heapq.heappush(busy, (finish, task))
                started[task] = clock
                logger.debug("[Scheduler] t=%d dispatch %s (until t=%d)", clock, task, finish)
                self._notify("dispatch", {"task": task, "start": clock, "finish": finish, "busy": len(busy)})

            # --- Advance: jump to the earliest completion ---
            # --- 推进：时钟跳到最早的完成时刻 ---
            clock, task = heapq.heappop(busy)

            # --- Complete: record it and unlock dependents before the next Fill ---
            # --- 完成：记录结果，并在下一次填充前解锁后继 ---
            result.append(ScheduleEntry(task=task, finish_time=clock, start_time=started[task]))
            unlocked = release(graph.successors(task), in_degree, ready)
            logger.debug("[Scheduler] t=%d complete %s, unlocked %s", clock, task, unlocked)
            self._notify("complete", {"task": task, "time": clock, "unlocked": unlocked})

        if len(result.entries) != len(graph):
            remaining = set(in_degree) - set(result.order)
            if self._strict:
                raise CycleDetectedError(remaining, partial=result)
            logger.warning("[Scheduler] Cycle detected! %d/%d tasks scheduled.",
                           len(result.entries), len(graph))
        else:
            logger.info("[Scheduler] %d tasks on %d worker(s), makespan %d",
                        len(result.entries), self._worker_count, result.makespan)
        return result

    def _notify(self, event: str, data: dict[str, Any]) -> None:
        try:
            self._emit(event, data)
        except Exception:
            # UI 异常不能影响模拟主流程
            logger.exception("[Scheduler] on_event callback failed for %s", event)


def schedule(
    graph: DependencyGraph,
    duration: DurationPolicy | None = None,
    worker_count: int | None = None,
    strict: bool | None = None,
) -> ScheduleResult:
    """Shorthand for WorkerPoolScheduler(duration, worker_count, strict).run(graph)."""
    return WorkerPoolScheduler(duration=duration, worker_count=worker_count, strict=strict).run(graph)
