"""
DAG module - Core engine for precedence-constrained scheduling.
DAG 模块 —— 带先后约束的任务调度核心引擎。

Components:
  - graph.py:      DependencyGraph data structure, in-degrees, error types
  - ready_set.py:  Min-priority ready set shared by both traversals
  - sequencer.py:  Deterministic topological order + critical path
  - scheduler.py:  Worker-pool discrete-event simulation
  - duration.py:   Duration policies (task id -> cost)

模块组成：
  - graph.py:      DependencyGraph 数据结构、入度计算与异常类型
  - ready_set.py:  两种遍历共用的最小优先就绪集合
  - sequencer.py:  确定性拓扑排序 + 关键路径
  - scheduler.py:  工作者池离散事件模拟
  - duration.py:   时长策略（任务 ID -> 耗时）
"""

from dag.graph import (  # 依赖图与异常
    CycleDetectedError,
    DependencyGraph,
    InvalidDurationError,
    MalformedEdgeError,
    SchedulingError,
    in_degrees,
)
from dag.duration import constant_duration, letter_duration, mapping_duration  # 时长策略
from dag.sequencer import critical_path, order_string, topological_order  # 拓扑排序器
from dag.scheduler import WorkerPoolScheduler, schedule  # 工作者池调度器
