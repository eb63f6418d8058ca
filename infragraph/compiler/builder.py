import logging
from dataclasses import replace
from typing import List, Set, Tuple

from infragraph.compiler.edges import (
    notification_edges,
    policy_edges,
    route_edges,
    schedule_edges,
    subscription_edges,
    websocket_edges,
)
from infragraph.compiler.nodes import (
    normalize_apis,
    normalize_bucket,
    normalize_key_value_stores,
    normalize_schedules,
    normalize_services,
    normalize_topics,
    normalize_websockets,
    resource_node_id,
)
from infragraph.compiler.types import Edge, Graph, Node
from infragraph.ir.directory import ResourceDirectory

logger = logging.getLogger(__name__)

# Emission order; the first resource to claim a node id keeps it.
RESOURCE_FIELDS = (
    "apis",
    "websockets",
    "schedules",
    "key_value_stores",
    "buckets",
    "topics",
    "services",
)


def dedupe_resources(directory: ResourceDirectory) -> Tuple[ResourceDirectory, Set[str]]:
    """
    Drop resources whose node id was already claimed, returning the
    trimmed directory together with the set of node ids it will emit.
    """
    seen: Set[str] = set()
    unique = {}
    for field_name in RESOURCE_FIELDS:
        kept = []
        for resource in getattr(directory, field_name):
            resource_id = resource_node_id(resource)
            if resource_id in seen:
                logger.debug("Dropping duplicate %s resource %s", resource.kind.value, resource_id)
                continue
            seen.add(resource_id)
            kept.append(resource)
        unique[field_name] = tuple(kept)
    return replace(directory, **unique), seen


def build(directory: ResourceDirectory) -> Graph:
    """
    Build the resource graph for one directory snapshot.

    Pure: the same directory always yields the same nodes and edges, and
    nothing is retained between calls.
    """
    directory, known_ids = dedupe_resources(directory)

    nodes: List[Node] = []
    edges: List[Edge] = []

    # -------------------------
    # APIs
    # -------------------------
    nodes.extend(normalize_apis(directory.apis))
    edges.extend(route_edges(directory.apis, known_ids))

    # -------------------------
    # Websockets
    # -------------------------
    nodes.extend(normalize_websockets(directory.websockets))
    edges.extend(websocket_edges(directory.websockets, known_ids))

    # -------------------------
    # Schedules
    # -------------------------
    nodes.extend(normalize_schedules(directory.schedules))
    edges.extend(schedule_edges(directory.schedules, known_ids))

    # -------------------------
    # Key-value stores
    # -------------------------
    nodes.extend(normalize_key_value_stores(directory.key_value_stores))

    # -------------------------
    # Buckets + notifications
    # -------------------------
    for bucket in directory.buckets:
        bucket_edges = notification_edges(bucket, directory.notifications, known_ids)
        nodes.append(normalize_bucket(bucket, len(bucket_edges)))
        edges.extend(bucket_edges)

    # -------------------------
    # Topics + subscriptions
    # -------------------------
    nodes.extend(normalize_topics(directory.topics))
    for topic in directory.topics:
        edges.extend(subscription_edges(topic, directory.subscriptions, known_ids))

    # -------------------------
    # Policies
    # -------------------------
    edges.extend(policy_edges(directory.policies, known_ids))

    # -------------------------
    # Services
    # -------------------------
    nodes.extend(normalize_services(directory.services))

    logger.debug("Built graph with %d nodes and %d edges", len(nodes), len(edges))
    return Graph(nodes=nodes, edges=edges)
