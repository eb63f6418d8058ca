"""Graph builder tests: node identity, edge emission and dropped relations."""

from infragraph.compiler import build
from infragraph.ir.directory import ResourceDirectory
from infragraph.ir.resources import (
    ApiResource,
    BucketResource,
    KeyValueStoreResource,
    Notification,
    Policy,
    PolicyRef,
    ResourceKind,
    Route,
    RouteMethod,
    ScheduleResource,
    ServiceResource,
    Subscription,
    TopicResource,
    WebsocketResource,
)


def make_api(name, *routes):
    return ApiResource(
        name=name,
        routes=tuple(
            Route(path=path, methods=tuple(RouteMethod(m, t) for m, t in methods))
            for path, methods in routes
        ),
    )


def full_directory() -> ResourceDirectory:
    return ResourceDirectory(
        apis=(
            make_api(
                "public",
                ("/users", [("GET", "userSvc"), ("POST", "userSvc")]),
                ("/orders", [("GET", "orderSvc")]),
            ),
        ),
        websockets=(
            WebsocketResource(name="chat", targets=(("connect", "userSvc"), ("message", "chatSvc"))),
        ),
        schedules=(ScheduleResource(name="nightly", target="orderSvc"),),
        topics=(TopicResource(name="events"),),
        buckets=(BucketResource(name="images"), BucketResource(name="empty")),
        key_value_stores=(KeyValueStoreResource(name="cache"),),
        services=(
            ServiceResource(name="userSvc", file_path="services/users.py"),
            ServiceResource(name="orderSvc", file_path="services/orders.py"),
            ServiceResource(name="chatSvc", file_path="services/chat.py"),
        ),
        subscriptions=(
            Subscription(topic="events", target="orderSvc"),
            Subscription(topic="events", target="ghost"),
        ),
        notifications=(
            Notification(bucket="images", target="userSvc", event_filter="write"),
            Notification(bucket="images", target="orderSvc", event_filter="delete"),
            Notification(bucket="images", target="missing"),
        ),
        policies=(
            Policy(
                name="users-read-images",
                principals=(PolicyRef("service", "userSvc"),),
                resources=(PolicyRef("bucket", "images"),),
                actions=("BucketFileGet", "BucketFileList"),
            ),
            Policy(
                name="orders-cache",
                principals=(PolicyRef("service", "orderSvc"),),
                resources=(PolicyRef("keyValueStore", "cache"),),
                actions=("KeyValueStoreRead",),
            ),
        ),
    )


def test_api_route_scenario():
    directory = ResourceDirectory(
        apis=(make_api("public", ("/users", [("GET", "userSvc")])),),
        services=(ServiceResource(name="userSvc"),),
    )

    graph = build(directory)

    assert [n.id for n in graph.nodes] == ["api-public", "userSvc"]
    assert len(graph.edges) == 1
    edge = graph.edges[0]
    assert (edge.source_id, edge.target_id, edge.label) == ("api-public", "userSvc", "routes")
    assert edge.directed
    assert edge.double_arrow


def test_topic_subscription_scenario():
    directory = ResourceDirectory(
        topics=(TopicResource(name="events"),),
        services=(ServiceResource(name="worker"),),
        subscriptions=(Subscription(topic="events", target="worker"),),
    )

    graph = build(directory)

    assert {n.id for n in graph.nodes} == {"topic-events", "worker"}
    assert [(e.source_id, e.target_id, e.label) for e in graph.edges] == [
        ("topic-events", "worker", "Triggers"),
    ]


def test_node_identity_and_descriptions():
    graph = build(full_directory())
    nodes = {n.id: n for n in graph.nodes}

    assert nodes["api-public"].description == "2 Routes"
    assert nodes["websocket-chat"].description == "2 Events"
    assert nodes["schedule-nightly"].kind == ResourceKind.SCHEDULE
    assert nodes["keyvaluestore-cache"].kind == ResourceKind.KEY_VALUE_STORE
    assert nodes["bucket-images"].description == "2 Notifications"
    assert nodes["bucket-empty"].description == "0 Notifications"
    assert nodes["userSvc"].kind == ResourceKind.SERVICE
    assert nodes["userSvc"].resource_ref.file_path == "services/users.py"


def test_single_route_is_singular():
    graph = build(ResourceDirectory(apis=(make_api("solo", ("/", [("GET", None)])),)))

    assert graph.nodes[0].description == "1 Route"
    assert graph.edges == []


def test_node_ids_are_unique():
    graph = build(full_directory())
    ids = [n.id for n in graph.nodes]

    assert len(ids) == len(set(ids))


def test_duplicate_resources_keep_first():
    directory = ResourceDirectory(
        buckets=(BucketResource(name="images"), BucketResource(name="images")),
        services=(ServiceResource(name="svc"), ServiceResource(name="bucket-images")),
        notifications=(Notification(bucket="images", target="svc"),),
    )

    graph = build(directory)

    assert [n.id for n in graph.nodes] == ["bucket-images", "svc"]
    assert len(graph.edges) == 1
    assert graph.nodes[0].description == "1 Notification"


def test_no_dangling_edges():
    graph = build(full_directory())
    node_ids = graph.node_ids

    for edge in graph.edges:
        assert edge.source_id in node_ids
        assert edge.target_id in node_ids
    assert not any(e.target_id in ("ghost", "missing") for e in graph.edges)


def test_unresolved_targets_are_dropped():
    directory = ResourceDirectory(
        apis=(make_api("public", ("/ghosts", [("GET", "ghostSvc")]), ("/ok", [("GET", "svc")])),),
        websockets=(WebsocketResource(name="chat", targets=(("connect", "svc"), ("disconnect", "nobody"))),),
        buckets=(BucketResource(name="images"),),
        services=(ServiceResource(name="svc"),),
        policies=(
            Policy(
                name="ghost-principal",
                principals=(PolicyRef("service", "nobody"),),
                resources=(PolicyRef("bucket", "images"),),
                actions=("BucketFileGet",),
            ),
            Policy(
                name="unknown-kind",
                principals=(PolicyRef("service", "svc"),),
                resources=(PolicyRef("collection", "images"),),
                actions=("BucketFileGet",),
            ),
            Policy(
                name="missing-bucket",
                principals=(PolicyRef("service", "svc"),),
                resources=(PolicyRef("bucket", "videos"),),
                actions=("BucketFileGet",),
            ),
        ),
    )

    graph = build(directory)

    assert [(e.id, e.target_id) for e in graph.edges] == [
        ("e-public-svc", "svc"),
        ("e-chat-svc-connect", "svc"),
    ]
    node_ids = graph.node_ids
    for edge in graph.edges:
        assert edge.source_id in node_ids
        assert edge.target_id in node_ids


def test_bucket_count_matches_notification_edges():
    graph = build(full_directory())

    for node in graph.nodes:
        if node.kind != ResourceKind.BUCKET:
            continue
        triggered = [e for e in graph.edges_from(node.id) if e.label == "Triggers"]
        assert node.description.split()[0] == str(len(triggered))


def test_route_edges_share_id_per_target():
    graph = build(full_directory())
    route_edges = [e for e in graph.edges if e.label == "routes"]

    assert [e.id for e in route_edges] == [
        "e-public-userSvc",
        "e-public-userSvc",
        "e-public-orderSvc",
    ]


def test_websocket_and_schedule_edges():
    graph = build(full_directory())
    by_id = {e.id: e for e in graph.edges}

    assert by_id["e-chat-userSvc-connect"].label == "connect"
    assert by_id["e-chat-chatSvc-message"].source_id == "websocket-chat"
    assert by_id["e-nightly-orderSvc"].label == "Triggers"
    assert by_id["e-nightly-orderSvc"].source_id == "schedule-nightly"


def test_schedule_without_resolvable_target_has_no_edge():
    directory = ResourceDirectory(
        schedules=(ScheduleResource(name="orphan", target="nowhere"), ScheduleResource(name="bare")),
    )

    graph = build(directory)

    assert len(graph.nodes) == 2
    assert graph.edges == []


def test_policy_edges():
    graph = build(full_directory())
    policy_edges = [e for e in graph.edges if not e.animated]

    assert [(e.id, e.source_id, e.target_id, e.label) for e in policy_edges] == [
        ("e-users-read-images", "userSvc", "bucket-images", "Get, List"),
        ("e-orders-cache", "orderSvc", "keyvaluestore-cache", "KeyValueStoreRead"),
    ]


def test_policy_uses_first_principal_and_resource_only():
    directory = ResourceDirectory(
        buckets=(BucketResource(name="a"), BucketResource(name="b")),
        services=(ServiceResource(name="s1"), ServiceResource(name="s2"), ServiceResource(name="s3")),
        policies=(
            Policy(
                principals=(PolicyRef("service", "s1"), PolicyRef("service", "s2"), PolicyRef("service", "s3")),
                resources=(PolicyRef("bucket", "a"), PolicyRef("bucket", "b")),
                actions=("BucketFilePut",),
            ),
        ),
    )

    graph = build(directory)

    assert len(graph.edges) == 1
    edge = graph.edges[0]
    assert (edge.source_id, edge.target_id, edge.label) == ("s1", "bucket-a", "Put")
    assert edge.id == "e-s1-bucket-a"


def test_policy_without_principals_or_resources_is_skipped():
    directory = ResourceDirectory(
        buckets=(BucketResource(name="a"),),
        services=(ServiceResource(name="s1"),),
        policies=(
            Policy(resources=(PolicyRef("bucket", "a"),), actions=("BucketFileGet",)),
            Policy(principals=(PolicyRef("service", "s1"),), actions=("BucketFileGet",)),
        ),
    )

    assert build(directory).edges == []


def test_service_title_uses_forward_slashes():
    graph = build(ResourceDirectory(services=(ServiceResource(name="services\\api.py"),)))

    assert graph.nodes[0].id == "services\\api.py"
    assert graph.nodes[0].title == "services/api.py"


def test_empty_directory_builds_empty_graph():
    graph = build(ResourceDirectory())

    assert graph.nodes == []
    assert graph.edges == []


def test_build_is_deterministic():
    first = build(full_directory())
    second = build(full_directory())

    assert {n.id for n in first.nodes} == {n.id for n in second.nodes}
    assert set(first.edges) == set(second.edges)
    assert first.nodes == second.nodes
