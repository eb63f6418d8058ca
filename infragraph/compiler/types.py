from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from infragraph.ir.resources import ResourceKind, ResourceRecord


@dataclass(frozen=True)
class Node:
    id: str
    kind: ResourceKind
    title: str
    description: str = ""
    resource_ref: Optional[ResourceRecord] = field(default=None, compare=False)


@dataclass(frozen=True)
class Edge:
    id: str
    source_id: str
    target_id: str
    label: str = ""
    directed: bool = True
    double_arrow: bool = True
    animated: bool = True


@dataclass
class Graph:
    nodes: List[Node] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)

    @property
    def node_ids(self) -> Set[str]:
        return {n.id for n in self.nodes}

    def edges_from(self, node_id: str) -> List[Edge]:
        return [e for e in self.edges if e.source_id == node_id]

    def nodes_by_kind(self) -> Dict[ResourceKind, List[Node]]:
        grouped: Dict[ResourceKind, List[Node]] = {}
        for node in self.nodes:
            grouped.setdefault(node.kind, []).append(node)
        return grouped
