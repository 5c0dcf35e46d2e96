"""
ReadySet - min-priority queue of tasks whose dependencies are all satisfied.
ReadySet —— 依赖已全部满足的任务的最小优先队列。

Ordered ascending by task id, so "smallest eligible id first" is the tie-break
whenever several tasks are ready at once.
按任务 ID 升序排列：多个任务同时就绪时，总是先取 ID 最小者。
"""

from __future__ import annotations

import heapq
from typing import Iterable

from schema import TaskId


class ReadySet:
    """Binary heap of ready task ids."""

    def __init__(self, tasks: Iterable[TaskId] = ()):
        self._heap: list[TaskId] = list(tasks)
        heapq.heapify(self._heap)

    @classmethod
    def from_in_degrees(cls, table: dict[TaskId, int]) -> ReadySet:
        """
        Seed with every task whose in-degree is zero.
        用所有入度为 0 的任务初始化就绪集合。
        """
        return cls(node for node, deg in table.items() if deg == 0)

    def push(self, task: TaskId) -> None:
        heapq.heappush(self._heap, task)

    def pop(self) -> TaskId:
        """Remove and return the smallest ready id."""
        return heapq.heappop(self._heap)

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __repr__(self) -> str:
        return f"ReadySet({sorted(self._heap)!r})"


def release(
    graph_successors: Iterable[TaskId],
    in_degree: dict[TaskId, int],
    ready: ReadySet,
) -> list[TaskId]:
    """
    Decrement each successor's in-degree and push those reaching zero.
    Returns the newly ready tasks in the order they were released.

    将每个后继的入度减 1，减到 0 的任务加入就绪集合。
    返回本次新就绪的任务（按释放顺序）。
    """
    unlocked: list[TaskId] = []
    for target in graph_successors:
        in_degree[target] -= 1
        if in_degree[target] == 0:
            ready.push(target)
            unlocked.append(target)
    return unlocked
