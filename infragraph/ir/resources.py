from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Tuple, Union


class ResourceKind(str, Enum):
    API = "api"
    WEBSOCKET = "websocket"
    SCHEDULE = "schedule"
    TOPIC = "topic"
    BUCKET = "bucket"
    KEY_VALUE_STORE = "keyvaluestore"
    SERVICE = "service"


# Alternative spellings seen in directory payloads and policy resource types.
KIND_ALIASES = {
    "api": ResourceKind.API,
    "apis": ResourceKind.API,
    "websocket": ResourceKind.WEBSOCKET,
    "websockets": ResourceKind.WEBSOCKET,
    "schedule": ResourceKind.SCHEDULE,
    "schedules": ResourceKind.SCHEDULE,
    "topic": ResourceKind.TOPIC,
    "topics": ResourceKind.TOPIC,
    "bucket": ResourceKind.BUCKET,
    "buckets": ResourceKind.BUCKET,
    "keyvaluestore": ResourceKind.KEY_VALUE_STORE,
    "keyvaluestores": ResourceKind.KEY_VALUE_STORE,
    "kv": ResourceKind.KEY_VALUE_STORE,
    "store": ResourceKind.KEY_VALUE_STORE,
    "stores": ResourceKind.KEY_VALUE_STORE,
    "service": ResourceKind.SERVICE,
    "services": ResourceKind.SERVICE,
}


def resolve_kind(value: str) -> Optional[ResourceKind]:
    """Map a payload spelling (``keyValueStore``, ``kv``, ``buckets``...) to a kind."""
    if isinstance(value, ResourceKind):
        return value
    if not value:
        return None
    return KIND_ALIASES.get(value.replace("_", "").replace("-", "").lower())


# -------------------------
# Resource records
# -------------------------

@dataclass(frozen=True)
class RouteMethod:
    method: str
    target: Optional[str] = None


@dataclass(frozen=True)
class Route:
    path: str
    methods: Tuple[RouteMethod, ...] = ()


@dataclass(frozen=True)
class ApiResource:
    kind: ClassVar[ResourceKind] = ResourceKind.API

    name: str
    routes: Tuple[Route, ...] = ()


@dataclass(frozen=True)
class WebsocketResource:
    kind: ClassVar[ResourceKind] = ResourceKind.WEBSOCKET

    name: str
    # (event_type, target) in declaration order
    targets: Tuple[Tuple[str, str], ...] = ()


@dataclass(frozen=True)
class ScheduleResource:
    kind: ClassVar[ResourceKind] = ResourceKind.SCHEDULE

    name: str
    target: Optional[str] = None
    expression: Optional[str] = None


@dataclass(frozen=True)
class TopicResource:
    kind: ClassVar[ResourceKind] = ResourceKind.TOPIC

    name: str


@dataclass(frozen=True)
class BucketResource:
    kind: ClassVar[ResourceKind] = ResourceKind.BUCKET

    name: str


@dataclass(frozen=True)
class KeyValueStoreResource:
    kind: ClassVar[ResourceKind] = ResourceKind.KEY_VALUE_STORE

    name: str


@dataclass(frozen=True)
class ServiceResource:
    kind: ClassVar[ResourceKind] = ResourceKind.SERVICE

    name: str
    file_path: str = ""


ResourceRecord = Union[
    ApiResource,
    WebsocketResource,
    ScheduleResource,
    TopicResource,
    BucketResource,
    KeyValueStoreResource,
    ServiceResource,
]


# -------------------------
# Cross-resource relations
# -------------------------

@dataclass(frozen=True)
class Subscription:
    topic: str
    target: str


@dataclass(frozen=True)
class Notification:
    bucket: str
    target: str
    event_filter: str = ""


@dataclass(frozen=True)
class PolicyRef:
    type: str
    name: str


@dataclass(frozen=True)
class Policy:
    principals: Tuple[PolicyRef, ...] = ()
    resources: Tuple[PolicyRef, ...] = ()
    actions: Tuple[str, ...] = ()
    name: str = ""
