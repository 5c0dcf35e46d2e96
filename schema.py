"""
Pydantic data models for the Precedence Scheduler.
Defines the records exchanged between the parser, the DAG core and the CLI.
Precedence Scheduler 的 Pydantic 数据模型。
定义了解析器、DAG 核心与命令行之间传递的数据结构。
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Task identifiers only need to be hashable and totally ordered
# (single uppercase letters in the instruction format).
# 任务标识只需可哈希且可全序比较（指令格式中为单个大写字母）。
TaskId = Hashable


# ======================================================================
# Input
# 输入模型
# ======================================================================

class PrecedenceEdge(BaseModel):
    """
    A "must-complete-before" constraint: `source` finishes before `target` starts.
    「必须先完成」约束：`source` 完成之后 `target` 才能开始。
    """
    model_config = ConfigDict(frozen=True)

    source: Any = Field(description="Task that must finish first")   # 前置任务
    target: Any = Field(description="Task that waits on the source")  # 后继任务

    def as_tuple(self) -> tuple[Any, Any]:
        return (self.source, self.target)


# ======================================================================
# Worker simulation output
# 工作者模拟输出
# ======================================================================

class ScheduleEntry(BaseModel):
    """
    One completed task in the simulated schedule. Appended once, never mutated.
    模拟调度中的一条完成记录，只追加一次，之后不再修改。
    """
    model_config = ConfigDict(frozen=True)

    task: Any = Field(description="Completed task identifier")                 # 完成的任务
    finish_time: int = Field(description="Virtual clock value at completion")  # 完成时刻（虚拟时钟）
    start_time: int = Field(default=0, description="Virtual clock value at dispatch")  # 开始时刻

    @property
    def duration(self) -> int:
        return self.finish_time - self.start_time


class ScheduleResult(BaseModel):
    """
    Full output of a worker-pool simulation, in completion order.
    工作者池模拟的完整输出，按完成顺序排列。
    """
    worker_count: int = Field(description="Size of the simulated worker pool")  # 工作者数量
    entries: list[ScheduleEntry] = Field(default_factory=list)                 # 按完成顺序排列的记录

    @property
    def makespan(self) -> int:
        """Completion time of the last entry (0 for an empty schedule)."""
        return self.entries[-1].finish_time if self.entries else 0

    @property
    def order(self) -> list[Any]:
        return [e.task for e in self.entries]

    def as_pairs(self) -> list[tuple[Any, int]]:
        """
        Return `(task, finish_time)` pairs in completion order.
        返回按完成顺序排列的 `(任务, 完成时刻)` 二元组列表。
        """
        return [(e.task, e.finish_time) for e in self.entries]

    def append(self, entry: ScheduleEntry) -> None:
        self.entries.append(entry)
