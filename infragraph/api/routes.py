import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, HTTPException

from infragraph.api.serializers import (
    serialize_edge_routes,
    serialize_graph,
    serialize_route,
)
from infragraph.compiler.builder import build
from infragraph.compiler.compiler import compile_graph
from infragraph.config import STRICT_VALIDATION
from infragraph.ir.errors import MalformedDirectoryError
from infragraph.routing.geometry import route
from infragraph.routing.graph_routes import route_graph
from infragraph.schemas import GraphRoutesRequest, RouteRequest
from infragraph.validation import validate_graph

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
def health():
    return {"status": "ok"}


@router.post("/graph")
def generate_graph(payload: Dict[str, Any] = Body(...), validate: bool = True):
    try:
        graph = compile_graph(payload)
    except MalformedDirectoryError as e:
        logger.info("Rejected directory: %s", e)
        raise HTTPException(status_code=422, detail={"message": str(e), "errors": e.errors})

    response = serialize_graph(graph)
    if validate:
        result = validate_graph(graph, strict=STRICT_VALIDATION)
        response["validation"] = result.to_dict()
        logger.info(
            "Built graph: %d nodes, %d edges (%s)",
            len(graph.nodes), len(graph.edges), result.get_summary(),
        )
    return response


@router.post("/route")
def route_edge(request: RouteRequest):
    result = route(request.source.to_geometry(), request.target.to_geometry())
    return serialize_route(result)


@router.post("/graph/routes")
def route_graph_edges(request: GraphRoutesRequest):
    graph = build(request.directory.to_directory())
    geometries = {
        node_id: geometry.to_geometry()
        for node_id, geometry in request.geometries.items()
    }
    routes = route_graph(graph, geometries)
    logger.info("Routed %d of %d edges", len(routes), len(graph.edges))
    return {"routes": serialize_edge_routes(routes)}
