from typing import Any, Dict, List, Mapping, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from infragraph.ir.directory import ResourceDirectory
from infragraph.ir.errors import MalformedDirectoryError
from infragraph.ir.resources import (
    ApiResource,
    BucketResource,
    KeyValueStoreResource,
    Notification,
    Policy,
    PolicyRef,
    Route,
    RouteMethod,
    ScheduleResource,
    ServiceResource,
    Subscription,
    TopicResource,
    WebsocketResource,
)
from infragraph.routing.geometry import Geometry

# HEAD, PATCH and TRACE operations are not drawn as routes.
HTTP_METHODS = ("get", "put", "post", "delete", "options")

OPENAPI_TARGET_KEY = "x-nitric-target"


class PayloadModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# -------------------------
# Resource payloads
# -------------------------

class RouteMethodPayload(PayloadModel):
    method: str
    target: Optional[str] = None

    def to_ir(self) -> RouteMethod:
        return RouteMethod(method=self.method.upper(), target=self.target)


class RoutePayload(PayloadModel):
    path: str
    methods: List[RouteMethodPayload] = []

    @field_validator("methods", mode="before")
    @classmethod
    def none_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_ir(self) -> Route:
        return Route(path=self.path, methods=tuple(m.to_ir() for m in self.methods))


def _routes_from_openapi(spec: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """Flatten an OpenAPI ``paths`` object into route payloads."""
    paths = spec.get("paths") or {}
    if not isinstance(paths, Mapping):
        raise ValueError("spec.paths must be an object")

    routes = []
    for path, operations in paths.items():
        if not isinstance(operations, Mapping):
            operations = {}
        methods = []
        for method in HTTP_METHODS:
            operation = operations.get(method)
            if not isinstance(operation, Mapping):
                continue
            target = operation.get(OPENAPI_TARGET_KEY)
            name = target.get("name") if isinstance(target, Mapping) else None
            methods.append({"method": method, "target": name})
        routes.append({"path": path, "methods": methods})
    return routes


class ApiPayload(PayloadModel):
    name: str
    routes: List[RoutePayload] = []

    @field_validator("routes", mode="before")
    @classmethod
    def none_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @model_validator(mode="before")
    @classmethod
    def expand_openapi_spec(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and "routes" not in data and isinstance(data.get("spec"), Mapping):
            data = dict(data)
            data["routes"] = _routes_from_openapi(data["spec"])
        return data

    def to_ir(self) -> ApiResource:
        return ApiResource(name=self.name, routes=tuple(r.to_ir() for r in self.routes))


class WebsocketPayload(PayloadModel):
    name: str
    targets: Dict[str, str] = {}

    def to_ir(self) -> WebsocketResource:
        return WebsocketResource(name=self.name, targets=tuple(self.targets.items()))


class SchedulePayload(PayloadModel):
    name: str
    target: Optional[str] = None
    expression: Optional[str] = None

    def to_ir(self) -> ScheduleResource:
        return ScheduleResource(name=self.name, target=self.target, expression=self.expression)


class NamedPayload(PayloadModel):
    name: str


class ServicePayload(PayloadModel):
    name: str
    file_path: str = Field(default="", validation_alias=AliasChoices("filePath", "file_path"))

    def to_ir(self) -> ServiceResource:
        return ServiceResource(name=self.name, file_path=self.file_path)


class SubscriptionPayload(PayloadModel):
    topic: str
    target: str


class NotificationPayload(PayloadModel):
    bucket: str
    target: str
    event_filter: str = Field(
        default="",
        validation_alias=AliasChoices("eventFilter", "event_filter", "notificationType"),
    )


class PolicyRefPayload(PayloadModel):
    type: str
    name: str


class PolicyPayload(PayloadModel):
    name: str = ""
    principals: List[PolicyRefPayload] = []
    resources: List[PolicyRefPayload] = []
    actions: List[str] = []

    @field_validator("principals", "resources", "actions", mode="before")
    @classmethod
    def none_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_ir(self) -> Policy:
        return Policy(
            name=self.name,
            principals=tuple(PolicyRef(type=p.type, name=p.name) for p in self.principals),
            resources=tuple(PolicyRef(type=r.type, name=r.name) for r in self.resources),
            actions=tuple(self.actions),
        )


class DirectoryPayload(PayloadModel):
    """Wire shape of one resource directory snapshot."""

    apis: List[ApiPayload] = []
    websockets: List[WebsocketPayload] = []
    schedules: List[SchedulePayload] = []
    topics: List[NamedPayload] = []
    buckets: List[NamedPayload] = []
    key_value_stores: List[NamedPayload] = Field(
        default=[],
        validation_alias=AliasChoices("keyValueStores", "key_value_stores", "stores"),
    )
    services: List[ServicePayload] = []
    subscriptions: List[SubscriptionPayload] = []
    notifications: List[NotificationPayload] = []
    policies: List[PolicyPayload] = []

    @field_validator("*", mode="before")
    @classmethod
    def none_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("policies", mode="before")
    @classmethod
    def policies_by_name(cls, value: Any) -> Any:
        # Some producers key policies by name instead of listing them.
        if isinstance(value, Mapping) and all(isinstance(p, Mapping) for p in value.values()):
            return [{"name": name, **policy} for name, policy in value.items()]
        return value

    def to_directory(self) -> ResourceDirectory:
        return ResourceDirectory(
            apis=tuple(a.to_ir() for a in self.apis),
            websockets=tuple(w.to_ir() for w in self.websockets),
            schedules=tuple(s.to_ir() for s in self.schedules),
            topics=tuple(TopicResource(name=t.name) for t in self.topics),
            buckets=tuple(BucketResource(name=b.name) for b in self.buckets),
            key_value_stores=tuple(KeyValueStoreResource(name=k.name) for k in self.key_value_stores),
            services=tuple(s.to_ir() for s in self.services),
            subscriptions=tuple(Subscription(topic=s.topic, target=s.target) for s in self.subscriptions),
            notifications=tuple(
                Notification(bucket=n.bucket, target=n.target, event_filter=n.event_filter)
                for n in self.notifications
            ),
            policies=tuple(p.to_ir() for p in self.policies),
        )


def load_directory(data: Optional[Mapping[str, Any]]) -> ResourceDirectory:
    """
    Validate a raw directory payload and convert it into a ResourceDirectory.

    Missing or null collections are empty. Records of the wrong shape raise
    MalformedDirectoryError with pydantic's error list attached.
    """
    if data is None:
        return ResourceDirectory()
    if not isinstance(data, Mapping):
        raise MalformedDirectoryError(
            f"directory payload must be an object, got {type(data).__name__}"
        )

    try:
        payload = DirectoryPayload.model_validate(data)
    except ValidationError as exc:
        raise MalformedDirectoryError(
            f"malformed directory: {exc.error_count()} invalid field(s)",
            errors=[
                {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
                for err in exc.errors()
            ],
        ) from exc

    return payload.to_directory()


# -------------------------
# Routing payloads
# -------------------------

class GeometryPayload(PayloadModel):
    model_config = ConfigDict(allow_inf_nan=False)

    x: float
    y: float
    width: float = Field(ge=0)
    height: float = Field(ge=0)

    def to_geometry(self) -> Geometry:
        return Geometry(x=self.x, y=self.y, width=self.width, height=self.height)


class RouteRequest(PayloadModel):
    source: GeometryPayload
    target: GeometryPayload


class GraphRoutesRequest(PayloadModel):
    directory: DirectoryPayload = DirectoryPayload()
    geometries: Dict[str, GeometryPayload] = {}
