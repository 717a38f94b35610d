"""Function models: external calls (HTTP APIs, Kafka topics) a node can trigger."""

from enum import Enum
from typing import Any

from pydantic import AliasChoices, Field, model_serializer, model_validator

from journeygraph.models.base import EntityCreate, JourneyInput, JourneyModel
from journeygraph.utils.identifiers import UNASSIGNED_ID


class FunctionType(str, Enum):
    """Transport the function is invoked over."""

    API = "API"
    KAFKA = "KAFKA"


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class HeaderKind(str, Enum):
    """Where a header value comes from."""

    custom = "custom"  # literal value
    property = "property"  # value is a Property id


class FunctionHeader(JourneyModel):
    """One request header.

    Serialized with `kind`; snapshots written with the older `type` key
    are still accepted.
    """

    key: str
    kind: HeaderKind = Field(
        default=HeaderKind.custom,
        validation_alias=AliasChoices("kind", "type"),
    )
    value: str = ""


class FunctionConfig(JourneyModel):
    """Call configuration.

    The known fields are typed. Anything else the editor attached lives in
    `extra_fields`; on the wire those keys sit flat next to the known ones.
    """

    host: str = ""
    path: str = ""
    method: HttpMethod = HttpMethod.GET
    header_params: dict[str, str] = Field(default_factory=dict)
    headers: list[FunctionHeader] = Field(default_factory=list)
    request_body: dict[str, str] | None = Field(default=None, alias="requestBody")
    request_body_path: dict[str, str] | None = Field(default=None, alias="requestBodyPath")
    extra_fields: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def fold_extra_fields(cls, data: Any) -> Any:
        """Move unknown top-level keys into `extra_fields`."""
        if not isinstance(data, dict):
            return data

        known: set[str] = set()
        for name, field in cls.model_fields.items():
            known.add(name)
            if field.alias:
                known.add(field.alias)

        extra = dict(data.get("extra_fields") or {})
        folded: dict[str, Any] = {}
        for key, value in data.items():
            if key == "extra_fields":
                continue
            if key in known:
                folded[key] = value
            else:
                extra[key] = value
        folded["extra_fields"] = extra
        return folded

    @model_serializer(mode="wrap")
    def flatten_extra_fields(self, handler) -> dict[str, Any]:
        data = handler(self)
        extra = data.pop("extra_fields", None) or {}
        for key, value in extra.items():
            # known fields win over a colliding extension key
            data.setdefault(key, value)
        return data

    def property_references(self) -> list[str]:
        """Property ids bound through headers and request body maps."""
        refs = [h.value for h in self.headers if h.kind == HeaderKind.property and h.value]
        for mapping in (self.request_body, self.request_body_path):
            if mapping:
                refs.extend(v for v in mapping.values() if v)
        return refs


class Function(JourneyModel):
    """An external call with its input/output property maps (key -> type)."""

    id: str = UNASSIGNED_ID
    name: str
    type: FunctionType
    config: FunctionConfig = Field(default_factory=FunctionConfig)
    input_properties: dict[str, str] = Field(default_factory=dict)
    output_properties: dict[str, str] = Field(default_factory=dict)


class FunctionCreate(EntityCreate):
    """Request model for adding a function."""

    entity_type = Function

    name: str
    type: FunctionType
    config: FunctionConfig = Field(default_factory=FunctionConfig)
    input_properties: dict[str, str] = Field(default_factory=dict)
    output_properties: dict[str, str] = Field(default_factory=dict)


class FunctionUpdate(JourneyInput):
    """Request model for updating a function; `config` is replaced whole."""

    name: str | None = None
    type: FunctionType | None = None
    config: FunctionConfig | None = None
    input_properties: dict[str, str] | None = None
    output_properties: dict[str, str] | None = None
