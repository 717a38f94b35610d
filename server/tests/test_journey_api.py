"""API tests for the catalog, draft lifecycle, entity routes and preview."""

import itertools

import pytest
from fastapi.testclient import TestClient

from journeygraph.persistence.blob_store import MemoryBlobStore
from journeygraph.persistence.repository import JourneyRepository
from server.app import app
from server.workspace import Workspace, get_workspace


@pytest.fixture
def workspace():
    counter = itertools.count(1)
    return Workspace(
        JourneyRepository(MemoryBlobStore()),
        issuer=lambda: f"id-{next(counter)}",
    )


@pytest.fixture
def client(workspace):
    app.dependency_overrides[get_workspace] = lambda: workspace
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def draft(client):
    """A seeded draft: journey id-1, Start id-2, End id-3, default edge id-4."""
    response = client.post("/api/draft", json={"name": "Signup"})
    assert response.status_code == 200
    return response.json()


def test_health(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


class TestDraftLifecycle:
    def test_no_draft_open(self, client):
        assert client.get("/api/draft").status_code == 409
        assert client.post("/api/draft/nodes", json={"name": "A", "type": "custom"}).status_code == 409
        assert client.get("/api/draft/preview").status_code == 409

    def test_new_draft_is_seeded(self, draft):
        assert draft["id"] == "id-1"
        assert draft["name"] == "Signup"
        assert draft["isActive"] is False
        assert [(n["id"], n["type"]) for n in draft["nodes"]] == [("id-2", "start"), ("id-3", "end")]
        assert draft["edges"] == [{
            "id": "id-4",
            "fromNodeId": "id-2",
            "toNodeId": "id-3",
            "validationCondition": "",
            "isDefault": True,
        }]

    def test_patch_and_toggle(self, client, draft):
        renamed = client.patch("/api/draft", json={"name": "Renamed"}).json()
        assert renamed["name"] == "Renamed"
        assert len(renamed["nodes"]) == 2
        assert renamed["updatedAt"] != draft["updatedAt"]

        assert client.post("/api/draft/toggle-active").json()["isActive"] is True
        assert client.get("/api/draft").json()["isActive"] is True


class TestEntityRoutes:
    def test_custom_start_edge_replaces_default(self, client, draft):
        node = client.post("/api/draft/nodes", json={"name": "Verify", "type": "custom"}).json()
        assert node["nodes"][-1]["id"] == "id-5"

        journey = client.post(
            "/api/draft/edges", json={"fromNodeId": "id-2", "toNodeId": "id-5"}
        ).json()
        assert [(e["fromNodeId"], e["isDefault"]) for e in journey["edges"]] == [("id-2", False)]

    def test_property_key_validation(self, client, draft):
        ok = client.post("/api/draft/properties", json={"key": "email", "type": "STRING"})
        assert ok.status_code == 200

        bad = client.post("/api/draft/properties", json={"key": "2fa", "type": "STRING"})
        assert bad.status_code == 422
        assert "Invalid property key" in bad.json()["detail"][0]

        dup = client.post("/api/draft/properties", json={"key": "email", "type": "NUMBER"})
        assert dup.status_code == 422
        assert "already in use" in dup.json()["detail"][0]

    def test_blank_name_rejected(self, client, draft):
        response = client.post("/api/draft/functions", json={"name": " ", "type": "API"})
        assert response.status_code == 422
        assert response.json()["detail"] == ["Function name must not be blank"]

    def test_unknown_enum_rejected(self, client, draft):
        response = client.post("/api/draft/nodes", json={"name": "A", "type": "subflow"})
        assert response.status_code == 422

    def test_delete_property_strips_nodes(self, client, draft):
        client.post("/api/draft/properties", json={"key": "email", "type": "STRING"})
        client.post("/api/draft/nodes", json={"name": "A", "type": "custom", "properties": ["id-5"]})

        journey = client.delete("/api/draft/properties/id-5").json()
        assert journey["properties"] == []
        assert journey["nodes"][-1]["properties"] == []

    def test_delete_node_cascades(self, client, draft):
        client.post("/api/draft/nodes", json={"name": "A", "type": "custom"})
        client.post("/api/draft/edges", json={"fromNodeId": "id-5", "toNodeId": "id-3"})
        client.post("/api/draft/functions", json={
            "name": "Send",
            "type": "API",
            "config": {"host": "api.example.com", "method": "POST", "timeoutMs": 500},
        })
        mapped = client.post(
            "/api/draft/mappings", json={"name": "send", "nodeId": "id-5", "functionId": "id-7"}
        ).json()
        assert mapped["mappings"][0]["id"] == "id-8"
        assert mapped["functions"][0]["config"]["timeoutMs"] == 500

        journey = client.delete("/api/draft/nodes/id-5").json()
        assert [n["id"] for n in journey["nodes"]] == ["id-2", "id-3"]
        assert journey["mappings"] == []
        assert [e["id"] for e in journey["edges"]] == ["id-4"]
        assert len(journey["functions"]) == 1

    def test_unknown_id_returns_unchanged_draft(self, client, draft):
        response = client.patch("/api/draft/nodes/nope", json={"name": "x"})
        assert response.status_code == 200
        assert response.json()["updatedAt"] == draft["updatedAt"]

    def test_update_edge_condition(self, client, draft):
        journey = client.patch(
            "/api/draft/edges/id-4", json={"validationCondition": "age > 18"}
        ).json()
        assert journey["edges"][0]["validationCondition"] == "age > 18"
        assert journey["edges"][0]["isDefault"] is True


class TestExplicitNull:
    """Explicit nulls on required fields are rejected and leave the draft usable."""

    def test_null_collection_rejected(self, client, draft):
        response = client.patch("/api/draft", json={"nodes": None})
        assert response.status_code == 422
        assert response.json()["detail"] == ["Journey field 'nodes' cannot be null"]

        assert len(client.get("/api/draft").json()["nodes"]) == 2
        assert client.get("/api/draft/preview").status_code == 200

    def test_null_node_name_rejected(self, client, draft):
        response = client.patch("/api/draft/nodes/id-2", json={"name": None})
        assert response.status_code == 422
        assert client.get("/api/draft").json()["nodes"][0]["name"] == "Start"

    def test_null_edge_endpoint_rejected(self, client, draft):
        response = client.patch("/api/draft/edges/id-4", json={"toNodeId": None})
        assert response.status_code == 422
        assert response.json()["detail"] == ["Edge field 'toNodeId' cannot be null"]

    def test_null_clears_manual_position(self, client, draft):
        client.patch("/api/draft/nodes/id-2", json={"x": 5, "y": 7})
        journey = client.patch("/api/draft/nodes/id-2", json={"x": None}).json()
        assert (journey["nodes"][0]["x"], journey["nodes"][0]["y"]) == (None, 7)


class TestPreview:
    def test_scene(self, client, draft):
        data = client.get("/api/draft/preview", params={"width": 600, "height": 300}).json()

        assert [(n["x"], n["y"]) for n in data["nodes"]] == [(200, 150), (400, 150)]
        assert data["edges"][0]["isDefault"] is True
        assert data["selectedNodeId"] is None

    def test_scene_with_selection(self, client, draft):
        data = client.get("/api/draft/preview", params={"selected": "id-3"}).json()
        assert [n["selected"] for n in data["nodes"]] == [False, True]

    def test_invalid_canvas(self, client, draft):
        assert client.get("/api/draft/preview", params={"width": 0}).status_code == 422

    def test_dead_end_edges_hidden(self, client, draft):
        client.post("/api/draft/nodes", json={"name": "Drop", "type": "dead_end"})
        client.post("/api/draft/edges", json={"fromNodeId": "id-5", "toNodeId": "id-3"})

        data = client.get("/api/draft/preview").json()
        assert [e["id"] for e in data["edges"]] == ["id-4"]
        assert len(data["nodes"]) == 3

    def test_svg(self, client, draft):
        response = client.get("/api/draft/preview.svg")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("image/svg+xml")
        assert response.text.startswith("<svg")
        assert 'data-node-id="id-2"' in response.text

    def test_node_details(self, client, draft):
        details = client.get("/api/draft/nodes/id-2/details").json()
        assert details["node"]["name"] == "Start"
        assert details["incoming"] == []
        assert details["outgoing"][0]["peerName"] == "End"

        assert client.get("/api/draft/nodes/nope/details").status_code == 404


class TestIntegrity:
    def test_report_and_prune(self, client, draft):
        client.patch("/api/draft", json={"edges": [
            {"id": "x", "fromNodeId": "id-2", "toNodeId": "ghost"},
        ]})

        report = client.get("/api/draft/integrity").json()
        assert report["danglingReferences"] == [{
            "ownerKind": "edge",
            "ownerId": "x",
            "field": "toNodeId",
            "missingId": "ghost",
        }]
        assert report["duplicatePropertyKeys"] == []

        # the preview tolerates the dangling edge
        assert client.get("/api/draft/preview").json()["edges"] == []

        pruned = client.post("/api/draft/prune").json()
        assert pruned["edges"] == []
        assert client.get("/api/draft/integrity").json()["danglingReferences"] == []


class TestCatalog:
    def test_save_list_open_delete(self, client, draft):
        saved = client.post("/api/draft/save").json()
        assert saved == {"saved": True, "id": "id-1"}

        listing = client.get("/api/journeys").json()
        assert [j["id"] for j in listing] == ["id-1"]
        assert listing[0]["counts"]["nodes"] == 2

        stored = client.get("/api/journeys/id-1").json()
        assert stored["name"] == "Signup"

        # edit the draft, then reopen the stored copy
        client.post("/api/draft/nodes", json={"name": "Unsaved", "type": "custom"})
        reopened = client.post("/api/draft/open/id-1").json()
        assert len(reopened["nodes"]) == 2

        assert client.delete("/api/journeys/id-1").json() == {"deleted": "id-1"}
        assert client.get("/api/journeys/id-1").status_code == 404
        assert client.delete("/api/journeys/id-1").status_code == 404

    def test_save_twice_upserts(self, client, draft):
        client.post("/api/draft/save")
        client.patch("/api/draft", json={"name": "v2"})
        client.post("/api/draft/save")

        listing = client.get("/api/journeys").json()
        assert [(j["id"], j["name"]) for j in listing] == [("id-1", "v2")]

    def test_open_unknown(self, client):
        assert client.post("/api/draft/open/nope").status_code == 404

    def test_listing_newest_first(self, client):
        client.post("/api/draft", json={"name": "first"})
        client.post("/api/draft/save")
        client.post("/api/draft", json={"name": "second"})
        client.post("/api/draft/save")

        assert [j["name"] for j in client.get("/api/journeys").json()] == ["second", "first"]
