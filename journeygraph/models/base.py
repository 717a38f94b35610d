"""Shared pydantic bases for journey entities and their request models."""

from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel

from journeygraph.utils.identifiers import UNASSIGNED_ID

M = TypeVar("M", bound=BaseModel)


class JourneyModel(BaseModel):
    """Base for stored entities.

    Attribute names are snake_case; the wire names are the aliases.
    Instances are frozen so a published snapshot never changes under a
    reader.
    """

    model_config = {"populate_by_name": True, "frozen": True}


class JourneyInput(BaseModel):
    """Base for request bodies (create and partial-update payloads)."""

    model_config = {"populate_by_name": True}


class EntityCreate(JourneyInput):
    """An entity minus its id."""

    entity_type: ClassVar[type[JourneyModel]]

    def build(self, entity_id: str = UNASSIGNED_ID) -> Any:
        """Materialize the entity, holding `entity_id` (unassigned by default)."""
        return self.entity_type.model_validate({**self.model_dump(), "id": entity_id})


def _accepts_null(model_type: type[BaseModel], name: str) -> bool:
    field = model_type.model_fields.get(name)
    return field is not None and field.default is None


def null_required_fields(model_type: type[BaseModel], update: BaseModel) -> list[str]:
    """Wire names of fields `update` explicitly sets to None that `model_type` requires."""
    names = []
    for name in update.model_fields_set:
        if getattr(update, name) is None and not _accepts_null(model_type, name):
            names.append(type(update).model_fields[name].alias or name)
    return sorted(names)


def settable_changes(model_type: type[BaseModel], changes: dict[str, Any]) -> dict[str, Any]:
    """Drop explicit None for fields `model_type` cannot hold None in."""
    return {
        name: value
        for name, value in changes.items()
        if value is not None or _accepts_null(model_type, name)
    }


def merge_model(entity: M, changes: BaseModel | dict[str, Any]) -> M:
    """Shallow-merge `changes` into `entity`, returning a new validated copy.

    Only fields explicitly set on a request model are applied, so a partial
    update never resets the fields it does not mention. An explicit None
    only clears fields that default to None (`x`, `y`, ...); on a required
    field it is ignored.
    """
    if isinstance(changes, BaseModel):
        changes = changes.model_dump(exclude_unset=True)
    changes = settable_changes(type(entity), changes)
    if not changes:
        return entity
    data = entity.model_dump()
    data.update(changes)
    return type(entity).model_validate(data)
