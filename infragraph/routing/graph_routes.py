import logging
from dataclasses import dataclass
from typing import List, Mapping

from infragraph.compiler.types import Graph
from infragraph.routing.geometry import Geometry, RouterResult, route

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EdgeRoute:
    edge_id: str
    source_id: str
    target_id: str
    result: RouterResult


def route_graph(graph: Graph, geometries: Mapping[str, Geometry]) -> List[EdgeRoute]:
    """
    Route every edge of a laid-out graph.

    Edges touching a node that has no geometry yet are skipped; each
    routed edge depends only on its own two nodes.
    """
    routes: List[EdgeRoute] = []
    for edge in graph.edges:
        source = geometries.get(edge.source_id)
        target = geometries.get(edge.target_id)
        if source is None or target is None:
            logger.debug("Skipping edge %s: node not laid out", edge.id)
            continue
        routes.append(
            EdgeRoute(
                edge_id=edge.id,
                source_id=edge.source_id,
                target_id=edge.target_id,
                result=route(source, target),
            )
        )
    return routes
