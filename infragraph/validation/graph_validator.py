"""
Graph Validator - Checks a built resource graph against the invariants the
renderer relies on.

Catches issues like:
- Duplicate node IDs
- Edges referencing missing nodes
- Edge ID collisions (expected for multi-method routes)
- Self-loops
- Orphaned nodes
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Set

from infragraph.compiler.types import Graph

logger = logging.getLogger(__name__)


class ValidationSeverity(Enum):
    ERROR = "error"      # Graph breaks a renderer invariant
    WARNING = "warning"  # Graph renders but looks wrong
    INFO = "info"        # Worth knowing, nothing to fix


@dataclass
class ValidationIssue:
    """A single validation issue found in the graph"""
    severity: ValidationSeverity
    code: str
    message: str
    node_id: Optional[str] = None
    edge_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "severity": self.severity.value,
            "code": self.code,
            "message": self.message,
            "nodeId": self.node_id,
            "edgeId": self.edge_id,
        }


@dataclass
class GraphValidationResult:
    is_valid: bool
    issues: List[ValidationIssue] = field(default_factory=list)
    stats: Dict[str, int] = field(default_factory=dict)

    @property
    def error_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.WARNING)

    @property
    def info_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.INFO)

    def codes(self) -> Set[str]:
        return {i.code for i in self.issues}

    def to_dict(self) -> dict:
        return {
            "isValid": self.is_valid,
            "errorCount": self.error_count,
            "warningCount": self.warning_count,
            "infoCount": self.info_count,
            "issues": [i.to_dict() for i in self.issues],
            "stats": self.stats,
        }

    def get_summary(self) -> str:
        status = "Valid" if self.is_valid else "Invalid"
        return (
            f"{status} | Errors: {self.error_count}, "
            f"Warnings: {self.warning_count}, Info: {self.info_count}"
        )


class GraphValidator:
    """
    Validates resource graphs before they are handed to the renderer.

    Usage:
        result = GraphValidator().validate(graph)
        if not result.is_valid:
            for issue in result.issues:
                print(f"[{issue.severity.value}] {issue.message}")
    """

    def __init__(self, strict_mode: bool = False):
        self.strict_mode = strict_mode

    def validate(self, graph: Graph) -> GraphValidationResult:
        issues: List[ValidationIssue] = []
        node_ids = graph.node_ids

        issues.extend(self._check_empty_graph(graph))
        issues.extend(self._check_duplicate_node_ids(graph))
        issues.extend(self._check_missing_edge_references(graph, node_ids))
        issues.extend(self._check_duplicate_edge_ids(graph))
        issues.extend(self._check_self_loops(graph))
        issues.extend(self._check_orphaned_nodes(graph))

        has_errors = any(i.severity == ValidationSeverity.ERROR for i in issues)
        has_warnings = any(i.severity == ValidationSeverity.WARNING for i in issues)

        is_valid = not has_errors
        if self.strict_mode:
            is_valid = not has_errors and not has_warnings

        result = GraphValidationResult(
            is_valid=is_valid,
            issues=issues,
            stats=self._calculate_stats(graph, node_ids),
        )
        logger.debug("Graph validation: %s", result.get_summary())
        return result

    def _check_empty_graph(self, graph: Graph) -> List[ValidationIssue]:
        if graph.nodes:
            return []
        # An application with nothing deployed yet is a legitimate snapshot.
        return [ValidationIssue(
            severity=ValidationSeverity.INFO,
            code="NO_NODES",
            message="Graph has no nodes",
        )]

    def _check_duplicate_node_ids(self, graph: Graph) -> List[ValidationIssue]:
        issues = []
        seen: Dict[str, int] = defaultdict(int)
        for node in graph.nodes:
            seen[node.id] += 1
        for node_id, count in seen.items():
            if count > 1:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    code="DUPLICATE_NODE_ID",
                    message=f"Duplicate node ID '{node_id}' appears {count} times",
                    node_id=node_id,
                ))
        return issues

    def _check_missing_edge_references(self, graph: Graph, node_ids: Set[str]) -> List[ValidationIssue]:
        issues = []
        for edge in graph.edges:
            if edge.source_id not in node_ids:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    code="MISSING_SOURCE_NODE",
                    message=f"Edge '{edge.id}' references non-existent source node '{edge.source_id}'",
                    edge_id=edge.id,
                ))
            if edge.target_id not in node_ids:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    code="MISSING_TARGET_NODE",
                    message=f"Edge '{edge.id}' references non-existent target node '{edge.target_id}'",
                    edge_id=edge.id,
                ))
        return issues

    def _check_duplicate_edge_ids(self, graph: Graph) -> List[ValidationIssue]:
        issues = []
        counts: Dict[str, int] = defaultdict(int)
        for edge in graph.edges:
            counts[edge.id] += 1
        for edge_id, count in counts.items():
            if count > 1:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.INFO,
                    code="DUPLICATE_EDGE_ID",
                    message=f"Edge ID '{edge_id}' is shared by {count} edges",
                    edge_id=edge_id,
                ))
        return issues

    def _check_self_loops(self, graph: Graph) -> List[ValidationIssue]:
        return [
            ValidationIssue(
                severity=ValidationSeverity.WARNING,
                code="SELF_LOOP",
                message=f"Edge '{edge.id}' loops on node '{edge.source_id}'",
                node_id=edge.source_id,
                edge_id=edge.id,
            )
            for edge in graph.edges
            if edge.source_id == edge.target_id
        ]

    def _check_orphaned_nodes(self, graph: Graph) -> List[ValidationIssue]:
        connected: Set[str] = set()
        for edge in graph.edges:
            connected.add(edge.source_id)
            connected.add(edge.target_id)

        issues = []
        for node in graph.nodes:
            if node.id in connected:
                continue
            issues.append(ValidationIssue(
                severity=ValidationSeverity.INFO,
                code="ORPHANED_NODE",
                message=f"{node.kind.value.capitalize()} '{node.title}' has no connections",
                node_id=node.id,
            ))
        return issues

    def _calculate_stats(self, graph: Graph, node_ids: Set[str]) -> Dict[str, int]:
        connected = set()
        for edge in graph.edges:
            connected.add(edge.source_id)
            connected.add(edge.target_id)

        stats = {
            "nodes": len(graph.nodes),
            "edges": len(graph.edges),
            "orphanedNodes": len(node_ids - connected),
        }
        for kind, nodes in graph.nodes_by_kind().items():
            stats[kind.value] = len(nodes)
        return stats


def validate_graph(graph: Graph, strict: bool = False) -> GraphValidationResult:
    """Convenience function to validate a graph."""
    return GraphValidator(strict_mode=strict).validate(graph)


def raise_on_errors(graph: Graph) -> None:
    """Validate graph and raise ValueError listing any errors."""
    result = validate_graph(graph)
    if not result.is_valid:
        error_messages = [
            f"[{i.code}] {i.message}"
            for i in result.issues
            if i.severity == ValidationSeverity.ERROR
        ]
        raise ValueError(
            f"Graph validation failed with {result.error_count} errors:\n" +
            "\n".join(error_messages)
        )
