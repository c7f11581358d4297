"""Response helpers shared by the feature routers."""

from typing import Any, Iterable, List, Optional, Type, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict

SchemaT = TypeVar("SchemaT", bound="OwnedOut")


class OwnedOut(BaseModel):
    """Fields every household-owned row carries in responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    added_by: Optional[str] = None  # owner's display name
    is_mine: bool = False


def serialize(schema: Type[SchemaT], entity: Any, viewer_id: UUID) -> SchemaT:
    """Build a response model for one row, annotated with who added it."""
    data = schema.model_validate(entity)
    profile = entity.user.profile if entity.user is not None else None
    return data.model_copy(
        update={
            "added_by": profile.full_name if profile is not None else None,
            "is_mine": entity.user_id == viewer_id,
        }
    )


def serialize_all(schema: Type[SchemaT], entities: Iterable[Any], viewer_id: UUID) -> List[SchemaT]:
    return [serialize(schema, entity, viewer_id) for entity in entities]
