"""
指令解析测试：将 "Step X must be finished before step Y can begin." 转换为先后约束边。
"""

from __future__ import annotations

import pytest

from dag import DependencyGraph, MalformedEdgeError, topological_order
from parsing import parse_edge, parse_edges
from schema import PrecedenceEdge

EXAMPLE_INPUT = """\
Step C must be finished before step A can begin.
Step C must be finished before step F can begin.
Step A must be finished before step B can begin.
Step A must be finished before step D can begin.
Step B must be finished before step E can begin.
Step D must be finished before step E can begin.
Step F must be finished before step E can begin.
"""


class TestParseEdge:

    def test_single_line(self):
        assert parse_edge("Step C must be finished before step A can begin.") == PrecedenceEdge(
            source="C", target="A"
        )

    def test_surrounding_whitespace(self):
        edge = parse_edge("   Step X must be finished before step Y can begin.\n")
        assert edge.as_tuple() == ("X", "Y")

    @pytest.mark.parametrize("line", [
        "Step C must be finished before step A can begin",
        "Step C must finish before step A can begin.",
        "C -> A",
        "",
    ])
    def test_rejects_other_shapes(self, line):
        with pytest.raises(MalformedEdgeError):
            parse_edge(line)


class TestParseEdges:

    def test_block(self):
        edges = parse_edges(EXAMPLE_INPUT)
        assert [e.as_tuple() for e in edges[:3]] == [("C", "A"), ("C", "F"), ("A", "B")]
        assert len(edges) == 7

    def test_blank_lines_skipped(self):
        text = "\nStep A must be finished before step B can begin.\n\n"
        assert [e.as_tuple() for e in parse_edges(text)] == [("A", "B")]

    def test_error_reports_line_number(self):
        text = "Step A must be finished before step B can begin.\nnonsense\n"
        with pytest.raises(MalformedEdgeError, match="line 2"):
            parse_edges(text)

    def test_feeds_graph(self):
        graph = DependencyGraph.build(parse_edges(EXAMPLE_INPUT))
        assert topological_order(graph) == ["C", "A", "B", "D", "F", "E"]
