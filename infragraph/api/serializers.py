from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional

from infragraph.compiler.types import Edge, Graph, Node
from infragraph.routing.geometry import RouterResult
from infragraph.routing.graph_routes import EdgeRoute
from infragraph.visual.visual_style import style_for

PRIMITIVE_TYPES = (str, int, float, bool, type(None))


def camel_case(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.capitalize() for part in rest)


def serialize_value(obj: Any):
    """
    Serialize records into JSON-compatible structures with camelCase keys.
    Deterministic.
    """
    if isinstance(obj, Enum):
        return obj.value

    if isinstance(obj, PRIMITIVE_TYPES):
        return obj

    if isinstance(obj, (list, tuple)):
        return [serialize_value(item) for item in obj]

    if isinstance(obj, dict):
        return {k: serialize_value(v) for k, v in obj.items()}

    if hasattr(obj, "__dict__"):
        data = {
            camel_case(key): serialize_value(value)
            for key, value in obj.__dict__.items()
            if not key.startswith("_")
        }
        kind = getattr(type(obj), "kind", None)
        if isinstance(kind, Enum):
            data = {"kind": kind.value, **data}
        return data

    return str(obj)


def serialize_node(node: Node, styles: Optional[Mapping[str, dict]] = None) -> Dict[str, Any]:
    return {
        "id": node.id,
        "kind": node.kind.value,
        "title": node.title,
        "description": node.description,
        "resourceRef": serialize_value(node.resource_ref),
        "style": dict(style_for(node.kind.value, styles)),
    }


def serialize_edge(edge: Edge) -> Dict[str, Any]:
    return {
        "id": edge.id,
        "sourceId": edge.source_id,
        "targetId": edge.target_id,
        "label": edge.label,
        "directed": edge.directed,
        "doubleArrow": edge.double_arrow,
        "animated": edge.animated,
    }


def serialize_graph(graph: Graph, styles: Optional[Mapping[str, dict]] = None) -> Dict[str, List[Dict[str, Any]]]:
    return {
        "nodes": [serialize_node(n, styles) for n in graph.nodes],
        "edges": [serialize_edge(e) for e in graph.edges],
    }


def serialize_route(result: RouterResult) -> Dict[str, Any]:
    return {
        "sourcePoint": {"x": result.source_point.x, "y": result.source_point.y},
        "sourceSide": result.source_side.value,
        "targetPoint": {"x": result.target_point.x, "y": result.target_point.y},
        "targetSide": result.target_side.value,
    }


def serialize_edge_routes(routes: Iterable[EdgeRoute]) -> List[Dict[str, Any]]:
    return [
        {
            "edgeId": r.edge_id,
            "sourceId": r.source_id,
            "targetId": r.target_id,
            **serialize_route(r.result),
        }
        for r in routes
    ]
