from dataclasses import dataclass
from typing import Tuple

from .resources import (
    ApiResource,
    BucketResource,
    KeyValueStoreResource,
    Notification,
    Policy,
    ScheduleResource,
    ServiceResource,
    Subscription,
    TopicResource,
    WebsocketResource,
)


@dataclass(frozen=True)
class ResourceDirectory:
    """
    One snapshot of an application's declared resources.

    Every collection defaults to empty so that partial snapshots
    (no policies yet, no notifications...) build without special casing.
    """

    apis: Tuple[ApiResource, ...] = ()
    websockets: Tuple[WebsocketResource, ...] = ()
    schedules: Tuple[ScheduleResource, ...] = ()
    topics: Tuple[TopicResource, ...] = ()
    buckets: Tuple[BucketResource, ...] = ()
    key_value_stores: Tuple[KeyValueStoreResource, ...] = ()
    services: Tuple[ServiceResource, ...] = ()
    subscriptions: Tuple[Subscription, ...] = ()
    notifications: Tuple[Notification, ...] = ()
    policies: Tuple[Policy, ...] = ()
