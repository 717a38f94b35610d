"""API routes for the journey catalog and the draft lifecycle."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from journeygraph.analysis.journey_summary import journey_summary, summary_to_dict
from journeygraph.models.journey import Journey, JourneyUpdate
from journeygraph.store.graph_store import JourneyStore
from journeygraph.utils.validation import validate_no_nulls
from server.workspace import Workspace, get_workspace

router = APIRouter()


class NewDraftRequest(BaseModel):
    """request body for starting a new journey draft."""

    name: str = ""
    description: str = ""


def require_store(workspace: Workspace = Depends(get_workspace)) -> JourneyStore:
    """Dependency resolving the open draft's store, 409 when none is open."""
    if workspace.store is None:
        raise HTTPException(status_code=409, detail="No journey draft is open")
    return workspace.store


# --- catalog ---


@router.get("/journeys")
def list_journeys(workspace: Workspace = Depends(get_workspace)) -> list[dict]:
    """list stored journeys with their headline counts, newest first."""
    journeys = sorted(workspace.repository.load(), key=lambda j: j.updated_at, reverse=True)
    return [summary_to_dict(journey_summary(j)) for j in journeys]


@router.get("/journeys/{journey_id}")
def get_journey(journey_id: str, workspace: Workspace = Depends(get_workspace)) -> Journey:
    journey = workspace.repository.get_journey(journey_id)
    if journey is None:
        raise HTTPException(status_code=404, detail=f"Journey not found: {journey_id}")
    return journey


@router.delete("/journeys/{journey_id}")
def delete_journey(journey_id: str, workspace: Workspace = Depends(get_workspace)) -> dict:
    if workspace.repository.get_journey(journey_id) is None:
        raise HTTPException(status_code=404, detail=f"Journey not found: {journey_id}")
    workspace.repository.remove_journey(journey_id)
    return {"deleted": journey_id}


# --- draft lifecycle ---


@router.post("/draft")
def new_draft(
    request: NewDraftRequest | None = None,
    workspace: Workspace = Depends(get_workspace),
) -> Journey:
    """start a new draft seeded with Start, End and the default edge."""
    request = request or NewDraftRequest()
    return workspace.new_draft(name=request.name, description=request.description)


@router.post("/draft/open/{journey_id}")
def open_draft(journey_id: str, workspace: Workspace = Depends(get_workspace)) -> Journey:
    """load a stored journey into the draft for editing."""
    journey = workspace.open_draft(journey_id)
    if journey is None:
        raise HTTPException(status_code=404, detail=f"Journey not found: {journey_id}")
    return journey


@router.get("/draft")
def get_draft(store: JourneyStore = Depends(require_store)) -> Journey:
    return store.snapshot


@router.patch("/draft")
def update_draft(request: JourneyUpdate, store: JourneyStore = Depends(require_store)) -> Journey:
    """shallow-merge journey fields (name, description, or whole collections)."""
    problems = validate_no_nulls(request, Journey, "Journey")
    if problems:
        raise HTTPException(status_code=422, detail=problems)
    return store.replace_whole(request)


@router.post("/draft/toggle-active")
def toggle_draft_active(store: JourneyStore = Depends(require_store)) -> Journey:
    return store.toggle_active()


@router.post("/draft/prune")
def prune_draft(store: JourneyStore = Depends(require_store)) -> Journey:
    """drop references to entities that no longer exist."""
    return store.prune_dangling()


@router.post("/draft/save")
def save_draft(
    workspace: Workspace = Depends(get_workspace),
    store: JourneyStore = Depends(require_store),
) -> dict:
    """write the draft into the catalog.

    A storage failure is reported in the body, the draft itself is untouched.
    """
    saved = workspace.save_draft()
    return {"saved": saved, "id": store.snapshot.id}
