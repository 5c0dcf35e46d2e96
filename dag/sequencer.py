"""
Topological Sequencer - one deterministic linear order of a DependencyGraph.
拓扑排序器 —— 为 DependencyGraph 生成唯一确定的线性顺序。

Kahn's algorithm with a min-priority ready set: whenever several tasks are
ready at once, the smallest id always goes next. For a given edge set there
is therefore exactly one correct answer.
使用最小优先就绪集合的 Kahn 算法：多个任务同时就绪时总是先取 ID 最小者，
因此对同一组边，结果唯一。
"""

from __future__ import annotations

import logging

import config
from dag.duration import DurationPolicy, resolve_duration
from dag.graph import CycleDetectedError, DependencyGraph
from dag.ready_set import ReadySet, release
from schema import TaskId

logger = logging.getLogger(__name__)


def topological_order(graph: DependencyGraph, strict: bool | None = None) -> list[TaskId]:
    """
    Kahn's algorithm - returns task ids in a valid execution order.
    Kahn 算法 —— 返回任务 ID 的合法拓扑执行顺序。
    保证每个任务出现在其所有前置任务之后。

    If the ready set drains before every task is visited the graph has a
    cycle: raises CycleDetectedError, or with strict=False logs a warning
    and returns the partial order.
    若就绪集合在访问完所有任务之前耗尽，说明存在环：抛出 CycleDetectedError；
    strict=False 时仅记录警告并返回部分顺序。
    """
    strict = config.FAIL_ON_CYCLE if strict is None else strict

    # 本次遍历独占的入度表与就绪集合
    in_degree = graph.in_degrees()
    ready = ReadySet.from_in_degrees(in_degree)
    order: list[TaskId] = []

    while ready:
        node = ready.pop()
        order.append(node)
        release(graph.successors(node), in_degree, ready)

    if len(order) != len(graph):
        remaining = set(in_degree) - set(order)
        if strict:
            raise CycleDetectedError(remaining, partial=order)
        logger.warning("[Sequencer] Cycle detected! Topological order incomplete (%d/%d).",
                       len(order), len(graph))
    else:
        logger.debug("[Sequencer] Order: %s", order)
    return order


def order_string(order: list[TaskId]) -> str:
    """Concatenate an order of ids, e.g. ['C', 'A', 'B'] -> 'CAB'."""
    return "".join(str(node) for node in order)


def critical_path(
    graph: DependencyGraph,
    duration: DurationPolicy,
    strict: bool | None = None,
) -> tuple[int, list[TaskId]]:
    """
    Longest-duration chain through the graph (forward pass over the topological order).
    图中耗时最长的依赖链（沿拓扑顺序做一次前向遍历）。

    Returns (length, path). With unlimited workers the makespan equals `length`.
    Ties are broken toward the smallest id, both for the chain's end and for
    each step back along it. Cycles are handled as in topological_order: with
    strict=False the chain covers only the tasks that could be ordered.
    返回 (长度, 路径)。工作者数量不受限时，总工期恰好等于该长度。
    终点与回溯时的前驱若有并列，均取 ID 最小者。
    环的处理与 topological_order 一致：strict=False 时只在可排序的任务上计算。
    """
    order = topological_order(graph, strict=strict)
    if not order:
        return 0, []

    start: dict[TaskId, int] = {node: 0 for node in order}        # 最早开始时间
    via: dict[TaskId, TaskId | None] = {node: None for node in order}  # 决定最早开始时间的前驱
    finish: dict[TaskId, int] = {}

    for node in order:
        finish[node] = start[node] + resolve_duration(duration, node)
        for succ in graph.successors(node):
            if succ not in start:
                continue  # 环上的任务从未就绪
            if finish[node] > start[succ] or (finish[node] == start[succ] and node < via[succ]):
                start[succ] = finish[node]
                via[succ] = node

    end = min(order, key=lambda n: (-finish[n], n))
    path = [end]
    while via[path[-1]] is not None:
        path.append(via[path[-1]])
    path.reverse()
    return finish[end], path
