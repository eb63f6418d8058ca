"""
Edge emission, one function per relationship encoding.

Every function receives the set of node ids already emitted and drops any
relationship whose endpoint is not in it: a directory may reference
resources that are not deployed yet, and the renderer must never see a
dangling edge.
"""

import logging
from typing import Iterable, List, Optional, Set

from infragraph.compiler.nodes import node_id, resource_node_id
from infragraph.compiler.types import Edge
from infragraph.compiler.verbs import policy_label
from infragraph.ir.resources import (
    ApiResource,
    BucketResource,
    Notification,
    Policy,
    PolicyRef,
    ResourceKind,
    ScheduleResource,
    Subscription,
    TopicResource,
    WebsocketResource,
    resolve_kind,
)

logger = logging.getLogger(__name__)

ROUTES_LABEL = "routes"
TRIGGERS_LABEL = "Triggers"


def _resolved(source: str, target: Optional[str], known_ids: Set[str], relation: str) -> bool:
    if not target:
        return False
    if source not in known_ids or target not in known_ids:
        logger.debug("Dropping %s edge %s -> %s: unresolved endpoint", relation, source, target)
        return False
    return True


def route_edges(apis: Iterable[ApiResource], known_ids: Set[str]) -> List[Edge]:
    edges: List[Edge] = []
    for api in apis:
        source = resource_node_id(api)
        for route in api.routes:
            for method in route.methods:
                if not _resolved(source, method.target, known_ids, "route"):
                    continue
                # Method is not part of the id; GET and POST on the same
                # path to the same target share one.
                edges.append(
                    Edge(
                        id=f"e-{api.name}-{method.target}",
                        source_id=source,
                        target_id=method.target,
                        label=ROUTES_LABEL,
                    )
                )
    return edges


def websocket_edges(websockets: Iterable[WebsocketResource], known_ids: Set[str]) -> List[Edge]:
    edges: List[Edge] = []
    for ws in websockets:
        source = resource_node_id(ws)
        for event_type, target in ws.targets:
            if not _resolved(source, target, known_ids, "websocket"):
                continue
            edges.append(
                Edge(
                    id=f"e-{ws.name}-{target}-{event_type}",
                    source_id=source,
                    target_id=target,
                    label=event_type,
                )
            )
    return edges


def schedule_edges(schedules: Iterable[ScheduleResource], known_ids: Set[str]) -> List[Edge]:
    edges: List[Edge] = []
    for schedule in schedules:
        source = resource_node_id(schedule)
        if not _resolved(source, schedule.target, known_ids, "schedule"):
            continue
        edges.append(
            Edge(
                id=f"e-{schedule.name}-{schedule.target}",
                source_id=source,
                target_id=schedule.target,
                label=TRIGGERS_LABEL,
            )
        )
    return edges


def notification_edges(
    bucket: BucketResource,
    notifications: Iterable[Notification],
    known_ids: Set[str],
) -> List[Edge]:
    source = resource_node_id(bucket)
    edges: List[Edge] = []
    for notification in notifications:
        if notification.bucket != bucket.name:
            continue
        if not _resolved(source, notification.target, known_ids, "notification"):
            continue
        edges.append(
            Edge(
                id=f"e-{notification.bucket}-{notification.target}",
                source_id=source,
                target_id=notification.target,
                label=TRIGGERS_LABEL,
            )
        )
    return edges


def subscription_edges(
    topic: TopicResource,
    subscriptions: Iterable[Subscription],
    known_ids: Set[str],
) -> List[Edge]:
    source = resource_node_id(topic)
    edges: List[Edge] = []
    for subscription in subscriptions:
        if subscription.topic != topic.name:
            continue
        if not _resolved(source, subscription.target, known_ids, "subscription"):
            continue
        edges.append(
            Edge(
                id=f"e-{subscription.topic}-{subscription.target}",
                source_id=source,
                target_id=subscription.target,
                label=TRIGGERS_LABEL,
            )
        )
    return edges


def policy_target_id(ref: PolicyRef) -> str:
    kind = resolve_kind(ref.type)
    if kind is None:
        return f"{ref.type}-{ref.name}"
    return node_id(kind, ref.name)


def policy_edges(policies: Iterable[Policy], known_ids: Set[str]) -> List[Edge]:
    """
    One edge per policy, principals[0] -> resources[0].

    Additional principals and resources are not drawn; a policy granting
    three services access to two buckets still renders as a single edge.
    """
    edges: List[Edge] = []
    for policy in policies:
        if not policy.principals or not policy.resources:
            logger.debug("Skipping policy %r without principals or resources", policy.name)
            continue

        # Principals are always services, referenced by bare name.
        source = node_id(ResourceKind.SERVICE, policy.principals[0].name)
        target = policy_target_id(policy.resources[0])
        if not _resolved(source, target, known_ids, "policy"):
            continue

        edge_id = f"e-{policy.name}" if policy.name else f"e-{source}-{target}"
        edges.append(
            Edge(
                id=edge_id,
                source_id=source,
                target_id=target,
                label=policy_label(policy.actions),
                animated=False,
            )
        )
    return edges
