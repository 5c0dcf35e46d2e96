"""
Instruction parser - turns precedence sentences into PrecedenceEdge records.
指令解析器 —— 将先后约束语句转换为 PrecedenceEdge 记录。

Accepted line format:
接受的行格式：
    Step C must be finished before step A can begin.

Blank lines are skipped; any other line shape is a MalformedEdgeError.
空行会被跳过；其它任何格式都会抛出 MalformedEdgeError。
"""

from __future__ import annotations

import logging
import re

from dag.graph import MalformedEdgeError
from schema import PrecedenceEdge

logger = logging.getLogger(__name__)

_INSTRUCTION_RE = re.compile(
    r"^Step (?P<source>\S+) must be finished before step (?P<target>\S+) can begin\.$"
)


def parse_edge(line: str) -> PrecedenceEdge:
    """
    Parse one instruction line.
    解析单行指令，返回对应的先后约束边。
    """
    match = _INSTRUCTION_RE.match(line.strip())
    if match is None:
        raise MalformedEdgeError(f"Unrecognised instruction: {line.strip()!r}")
    return PrecedenceEdge(source=match.group("source"), target=match.group("target"))


def parse_edges(text: str) -> list[PrecedenceEdge]:
    """
    Parse every non-blank line of `text`, reporting the line number on failure.
    解析 `text` 中所有非空行；出错时在异常信息中给出行号。
    """
    edges: list[PrecedenceEdge] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            edges.append(parse_edge(line))
        except MalformedEdgeError as exc:
            raise MalformedEdgeError(f"line {lineno}: {exc}") from exc
    logger.debug("[Parser] Parsed %d edge(s)", len(edges))
    return edges
