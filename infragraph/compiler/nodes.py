from typing import Iterable, List

from infragraph.compiler.types import Node
from infragraph.ir.resources import (
    ApiResource,
    BucketResource,
    KeyValueStoreResource,
    ResourceKind,
    ResourceRecord,
    ScheduleResource,
    ServiceResource,
    TopicResource,
    WebsocketResource,
)


def node_id(kind: ResourceKind, name: str) -> str:
    # Services double as policy principals, which are referenced by bare name.
    if kind == ResourceKind.SERVICE:
        return name
    return f"{kind.value}-{name}"


def resource_node_id(resource: ResourceRecord) -> str:
    return node_id(resource.kind, resource.name)


def pluralize(count: int, noun: str) -> str:
    return f"{count} {noun if count == 1 else noun + 's'}"


# -------------------------
# Per-kind emission
# -------------------------

def normalize_apis(apis: Iterable[ApiResource]) -> List[Node]:
    return [
        Node(
            id=resource_node_id(api),
            kind=api.kind,
            title=api.name,
            description=pluralize(len(api.routes), "Route"),
            resource_ref=api,
        )
        for api in apis
    ]


def normalize_websockets(websockets: Iterable[WebsocketResource]) -> List[Node]:
    return [
        Node(
            id=resource_node_id(ws),
            kind=ws.kind,
            title=ws.name,
            description=pluralize(len(ws.targets), "Event"),
            resource_ref=ws,
        )
        for ws in websockets
    ]


def normalize_schedules(schedules: Iterable[ScheduleResource]) -> List[Node]:
    return [
        Node(
            id=resource_node_id(schedule),
            kind=schedule.kind,
            title=schedule.name,
            resource_ref=schedule,
        )
        for schedule in schedules
    ]


def normalize_key_value_stores(stores: Iterable[KeyValueStoreResource]) -> List[Node]:
    return [
        Node(
            id=resource_node_id(store),
            kind=store.kind,
            title=store.name,
            resource_ref=store,
        )
        for store in stores
    ]


def normalize_bucket(bucket: BucketResource, notification_count: int) -> Node:
    """
    Bucket description counts only the notifications that made it into the
    graph, so the caller passes the resolved count rather than the raw one.
    """
    return Node(
        id=resource_node_id(bucket),
        kind=bucket.kind,
        title=bucket.name,
        description=pluralize(notification_count, "Notification"),
        resource_ref=bucket,
    )


def normalize_topics(topics: Iterable[TopicResource]) -> List[Node]:
    return [
        Node(
            id=resource_node_id(topic),
            kind=topic.kind,
            title=topic.name,
            resource_ref=topic,
        )
        for topic in topics
    ]


def normalize_services(services: Iterable[ServiceResource]) -> List[Node]:
    return [
        Node(
            id=resource_node_id(service),
            kind=service.kind,
            title=service.name.replace("\\", "/"),
            resource_ref=service,
        )
        for service in services
    ]
