"""
Duration policies - map a task id to a positive integer cost.
时长策略 —— 将任务 ID 映射为正整数耗时。

A policy is any pure callable `cost(task_id) -> int > 0`. The scheduler only
depends on that interface; the helpers below cover the common cases.
策略是任意纯函数 `cost(task_id) -> int > 0`。调度器只依赖该接口，
下面的辅助函数覆盖了常见用法。
"""

from __future__ import annotations

from typing import Callable, Mapping

import config
from dag.graph import InvalidDurationError
from schema import TaskId

DurationPolicy = Callable[[TaskId], int]


def letter_duration(base_offset: int | None = None) -> DurationPolicy:
    """
    cost(id) = (id - 'A') + base_offset for single-character ids.
    单字符 ID 的耗时：A 为 base_offset，B 为 base_offset + 1，依此类推。

    base_offset defaults to config.DURATION_BASE_OFFSET (61).
    """
    offset = config.DURATION_BASE_OFFSET if base_offset is None else base_offset

    def cost(task: TaskId) -> int:
        if not isinstance(task, str) or len(task) != 1:
            raise InvalidDurationError(f"Letter duration needs a single-character id, got {task!r}")
        return ord(task) - ord("A") + offset

    return cost


def constant_duration(value: int) -> DurationPolicy:
    """Every task costs `value`."""
    def cost(task: TaskId) -> int:
        return value

    return cost


def mapping_duration(table: Mapping[TaskId, int]) -> DurationPolicy:
    """Look each task up in an explicit table."""
    def cost(task: TaskId) -> int:
        try:
            return table[task]
        except KeyError:
            raise InvalidDurationError(f"No duration configured for task {task!r}") from None

    return cost


def resolve_duration(policy: DurationPolicy, task: TaskId) -> int:
    """
    Apply `policy` to `task` and check the result is a positive integer.
    对 `task` 应用策略，并校验结果为正整数（bool 不算整数）。
    """
    value = policy(task)
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidDurationError(f"Duration of task {task!r} must be an int, got {value!r}")
    if value <= 0:
        raise InvalidDurationError(f"Duration of task {task!r} must be positive, got {value}")
    return value
