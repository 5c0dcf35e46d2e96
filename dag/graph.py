"""
DependencyGraph - adjacency structure for precedence-constrained tasks.
DependencyGraph —— 带先后约束任务的邻接结构。

The DependencyGraph holds:
  - successors: dict of task id -> list of tasks that depend on it directly

DependencyGraph 包含：
  - successors: 任务 ID -> 直接依赖它的任务列表（出边）

Every id that appears in any edge, as source or target, owns an entry even
when it has no dependents, so leaf tasks are still scheduled and still show
up in in-degree bookkeeping.
任何在边中出现过的 ID（无论作为起点还是终点）都拥有一个条目，即使没有后继，
从而保证叶子任务依然会被调度，并出现在入度统计中。

Key operations:
  - build():      construct the graph from precedence edges
  - in_degrees(): fresh in-degree table for one traversal

核心操作：
  - build():      从先后约束边构建图
  - in_degrees(): 为单次遍历生成全新的入度表
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from schema import PrecedenceEdge, TaskId

logger = logging.getLogger(__name__)


# ======================================================================
# Errors
# 异常定义
# ======================================================================

class SchedulingError(Exception):
    """
    Base class for every failure raised by the scheduling core.
    调度核心抛出的所有异常的基类。
    """
    pass


class MalformedEdgeError(SchedulingError, ValueError):
    """
    Raised when an edge is not a (source, target) pair or an instruction
    line cannot be parsed.
    当边不是 (source, target) 二元组，或指令行无法解析时抛出。
    """
    pass


class InvalidDurationError(SchedulingError, ValueError):
    """
    Raised when a duration policy cannot price a task or returns a
    non-positive / non-integer cost.
    当时长策略无法为任务定价，或返回非正数 / 非整数耗时时抛出。
    """
    pass


class CycleDetectedError(SchedulingError):
    """
    Raised when the ready set drains while tasks remain unvisited.
    当就绪集合耗尽但仍有任务未被访问时抛出（说明图中存在环）。

    Attributes:
        remaining: ids that were never reached (members of, or blocked by, a cycle)
        partial:   the order / schedule produced before the traversal stalled
    """

    def __init__(self, remaining: Iterable[TaskId], partial: Any = None):
        self.remaining = sorted(remaining)
        self.partial = partial
        super().__init__(
            f"Cycle detected: {len(self.remaining)} task(s) can never become ready: "
            f"{', '.join(str(t) for t in self.remaining)}"
        )


# ======================================================================
# Graph
# 依赖图
# ======================================================================

class DependencyGraph:
    """
    Mapping of each task to the tasks that depend on it directly.
    每个任务到其直接后继任务的映射。

    Duplicate edges are kept: the same target appears twice in the source's
    successor list and is counted twice in the in-degree table. Both
    traversals decrement once per listed edge, so ordering is unaffected.
    重复边会被保留：同一目标会在源节点的后继列表中出现两次，入度也计两次。
    两种遍历都按列表逐条递减，因此不影响最终顺序。
    """

    def __init__(self):
        self._successors: dict[TaskId, list[TaskId]] = {}

    @classmethod
    def build(cls, edges: Iterable[PrecedenceEdge | tuple[TaskId, TaskId]]) -> DependencyGraph:
        """
        Build the graph from precedence edges in any order.
        从任意顺序的先后约束边构建依赖图。

        Each edge is either a PrecedenceEdge or a (source, target) pair.
        每条边可以是 PrecedenceEdge，也可以是 (source, target) 二元组。
        """
        graph = cls()
        for edge in edges:
            source, target = _unpack_edge(edge)
            graph.add_edge(source, target)
        logger.debug("[DAG] Built %s", graph.summary())
        return graph

    def add_edge(self, source: TaskId, target: TaskId) -> None:
        # 顺序与约束一致：先保证 target 有条目，再追加出边，最后保证 source 有条目
        self._successors.setdefault(target, [])
        self._successors.setdefault(source, []).append(target)

    # ------------------------------------------------------------------
    # Queries
    # 查询方法
    # ------------------------------------------------------------------

    @property
    def nodes(self) -> list[TaskId]:
        """All task ids, ascending."""
        return sorted(self._successors)

    @property
    def edge_count(self) -> int:
        return sum(len(targets) for targets in self._successors.values())

    def successors(self, node: TaskId) -> list[TaskId]:
        """
        Return the tasks that depend directly on `node` (duplicates included).
        返回直接依赖 `node` 的任务列表（包含重复边）。
        """
        return list(self._successors[node])

    def in_degrees(self) -> dict[TaskId, int]:
        """
        Fresh in-degree table: every node starts at 0, then each outgoing
        edge adds 1 to its target. Same key set as the graph.

        全新的入度表：所有节点初始为 0，每条出边令其目标加 1。
        键集合与图完全一致。每次遍历各自调用一次，互不共享可变状态。
        """
        table: dict[TaskId, int] = {node: 0 for node in self._successors}
        for targets in self._successors.values():
            for target in targets:
                table[target] += 1
        return table

    def roots(self) -> list[TaskId]:
        """Tasks with no incoming edge, ascending."""
        return sorted(node for node, deg in self.in_degrees().items() if deg == 0)

    def __len__(self) -> int:
        return len(self._successors)

    def __contains__(self, node: object) -> bool:
        return node in self._successors

    def __iter__(self):
        return iter(self.nodes)

    # ------------------------------------------------------------------
    # Display helpers
    # 展示辅助方法
    # ------------------------------------------------------------------

    def summary(self) -> str:
        """
        One-line summary for logging.
        生成单行摘要，用于日志输出，如：DAG[6 nodes, 7 edges, 1 root]
        """
        roots = len(self.roots())
        return f"DAG[{len(self)} nodes, {self.edge_count} edges, {roots} root{'s' if roots != 1 else ''}]"

    def to_dict(self) -> dict[TaskId, list[TaskId]]:
        """
        Snapshot of the adjacency lists, keyed in ascending id order.
        邻接表快照，按 ID 升序排列，供展示或重建使用。
        """
        return {node: list(self._successors[node]) for node in self.nodes}


def in_degrees(graph: DependencyGraph) -> dict[TaskId, int]:
    """Module-level alias of DependencyGraph.in_degrees()."""
    return graph.in_degrees()


def _unpack_edge(edge: Any) -> tuple[TaskId, TaskId]:
    # BaseModel 可迭代但迭代出的是 (字段名, 值)，需单独处理
    if isinstance(edge, PrecedenceEdge):
        return edge.as_tuple()
    if isinstance(edge, (str, bytes)):
        raise MalformedEdgeError(f"Edge must be a (source, target) pair, got {edge!r}")
    try:
        source, target = edge
    except (TypeError, ValueError) as exc:
        raise MalformedEdgeError(f"Edge must be a (source, target) pair, got {edge!r}") from exc
    try:
        hash(source)
        hash(target)
    except TypeError as exc:
        raise MalformedEdgeError(f"Edge endpoints must be hashable, got {edge!r}") from exc
    return source, target
