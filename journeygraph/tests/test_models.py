"""Tests for entity models, aliases and request models."""

import json

import pytest
from pydantic import ValidationError

from journeygraph.models import (
    Edge,
    EdgeCreate,
    Function,
    FunctionConfig,
    FunctionHeader,
    FunctionType,
    HeaderKind,
    HttpMethod,
    Journey,
    JourneyUpdate,
    Node,
    NodeCreate,
    NodeType,
    NodeUpdate,
    Property,
    PropertyType,
    merge_model,
    null_required_fields,
)
from journeygraph.utils.identifiers import UNASSIGNED_ID


class TestWireNames:
    """Models read and write the camelCase field names of the stored format."""

    def test_property_accepts_alias(self):
        """validationCondition should populate validation_condition."""
        prop = Property.model_validate({
            "id": "p1",
            "key": "email",
            "type": "STRING",
            "validationCondition": "contains('@')",
        })
        assert prop.validation_condition == "contains('@')"
        assert prop.type == PropertyType.STRING

    def test_edge_dumps_aliases(self):
        """Edges should serialize with fromNodeId/toNodeId/isDefault."""
        edge = Edge(id="e1", from_node_id="a", to_node_id="b", is_default=True)
        data = edge.model_dump(by_alias=True)
        assert data == {
            "id": "e1",
            "fromNodeId": "a",
            "toNodeId": "b",
            "validationCondition": "",
            "isDefault": True,
        }

    def test_journey_round_trip(self):
        """Journey should survive a JSON round trip through its wire names."""
        journey = Journey(
            id="j1",
            name="Onboarding",
            nodes=[Node(id="n1", name="Start", type=NodeType.start)],
            is_active=True,
        )
        payload = journey.model_dump_json(by_alias=True)
        assert '"isActive":true' in payload
        restored = Journey.model_validate_json(payload)
        assert restored == journey


class TestNode:
    def test_properties_are_an_ordered_set(self):
        """Duplicate property ids collapse, first occurrence wins."""
        node = Node(name="A", type=NodeType.custom, properties=["p2", "p1", "p2"])
        assert node.properties == ["p2", "p1"]

    def test_node_is_frozen(self):
        """Published entities cannot be mutated in place."""
        node = Node(id="n1", name="A", type=NodeType.custom)
        with pytest.raises(ValidationError):
            node.name = "B"

    def test_rejects_unknown_type(self):
        with pytest.raises(ValidationError):
            Node(name="A", type="subflow")

    def test_create_builds_unassigned_entity(self):
        node = NodeCreate(name="A", type=NodeType.loader).build()
        assert node.id == UNASSIGNED_ID
        assert node.type == NodeType.loader

    def test_create_builds_with_issued_id(self):
        node = NodeCreate(name="A", type=NodeType.loader).build("n-42")
        assert node.id == "n-42"


class TestMergeModel:
    def test_only_set_fields_are_applied(self):
        """Fields not mentioned by the update keep their values."""
        node = Node(id="n1", name="A", type=NodeType.custom, description="first step")
        merged = merge_model(node, NodeUpdate(name="B"))
        assert merged.name == "B"
        assert merged.description == "first step"
        assert merged.id == "n1"

    def test_empty_update_returns_same_entity(self):
        node = Node(id="n1", name="A", type=NodeType.custom)
        assert merge_model(node, NodeUpdate()) is node

    def test_explicit_none_clears_optional_field(self):
        node = Node(id="n1", name="A", type=NodeType.custom, x=10.0, y=20.0)
        merged = merge_model(node, NodeUpdate(x=None))
        assert merged.x is None
        assert merged.y == 20.0


class TestFunctionConfig:
    """Known config fields are typed; anything else lands in extra_fields."""

    def test_unknown_keys_fold_into_extra_fields(self):
        config = FunctionConfig.model_validate({
            "host": "https://api.example.com",
            "path": "/users",
            "method": "POST",
            "requestBody": {"email": "p1"},
            "timeout": "30",
            "retries": 3,
        })
        assert config.method == HttpMethod.POST
        assert config.request_body == {"email": "p1"}
        assert config.extra_fields == {"timeout": "30", "retries": 3}

    def test_extra_fields_flatten_on_dump(self):
        config = FunctionConfig(host="h", extra_fields={"topic": "users"})
        data = config.model_dump(by_alias=True)
        assert data["topic"] == "users"
        assert "extra_fields" not in data
        assert data["requestBody"] is None

    def test_extra_fields_survive_json_round_trip(self):
        func = Function(
            id="f1",
            name="Publish",
            type=FunctionType.KAFKA,
            config=FunctionConfig(extra_fields={"topic": "users"}),
        )
        restored = Function.model_validate(json.loads(func.model_dump_json(by_alias=True)))
        assert restored.config.extra_fields == {"topic": "users"}

    def test_header_accepts_legacy_type_key(self):
        """Headers stored with `type` should load as `kind`."""
        header = FunctionHeader.model_validate(
            {"key": "Authorization", "type": "property", "value": "p1"}
        )
        assert header.kind == HeaderKind.property
        assert header.model_dump(by_alias=True) == {
            "key": "Authorization",
            "kind": "property",
            "value": "p1",
        }

    def test_property_references(self):
        config = FunctionConfig(
            headers=[
                FunctionHeader(key="X-Token", kind=HeaderKind.property, value="p1"),
                FunctionHeader(key="X-Static", kind=HeaderKind.custom, value="abc"),
            ],
            request_body={"email": "p2"},
            request_body_path={"id": "p3"},
        )
        assert config.property_references() == ["p1", "p2", "p3"]


class TestJourney:
    def test_defaults(self):
        journey = Journey()
        assert journey.id == UNASSIGNED_ID
        assert journey.is_active is False
        assert journey.nodes == []
        assert journey.created_at.tzinfo is not None

    def test_start_node_is_first_start(self):
        journey = Journey(nodes=[
            Node(id="a", name="A", type=NodeType.custom),
            Node(id="s1", name="S1", type=NodeType.start),
            Node(id="s2", name="S2", type=NodeType.start),
        ])
        assert journey.start_node().id == "s1"

    def test_start_node_missing(self):
        assert Journey().start_node() is None

    def test_edge_create_accepts_aliases(self):
        data = EdgeCreate.model_validate({"fromNodeId": "a", "toNodeId": "b"})
        assert data.from_node_id == "a"
        assert data.is_default is False


class TestNullRequiredFields:
    def test_merge_ignores_null_on_required_field(self):
        node = Node(id="n1", name="A", type=NodeType.custom)
        assert merge_model(node, NodeUpdate(name=None)) is node

    def test_reports_wire_names(self):
        update = JourneyUpdate(is_active=None, nodes=None, name="ok")
        assert null_required_fields(Journey, update) == ["isActive", "nodes"]

    def test_optional_fields_are_not_reported(self):
        assert null_required_fields(Node, NodeUpdate(x=None, y=None)) == []
