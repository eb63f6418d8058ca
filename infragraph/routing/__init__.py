# Edge routing: connector endpoints for laid-out nodes

from infragraph.routing.geometry import (
    Geometry,
    Point,
    RouterResult,
    Side,
    edge_side,
    node_intersection,
    route,
)
from infragraph.routing.graph_routes import EdgeRoute, route_graph

__all__ = [
    "Geometry",
    "Point",
    "RouterResult",
    "Side",
    "edge_side",
    "node_intersection",
    "route",
    "EdgeRoute",
    "route_graph",
]
