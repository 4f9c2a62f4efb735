from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, WithJsonSchema

# Body fields are accepted as any JSON value and type-checked by the store, which
# runs after the existence check, so a bad type on a missing task is still a 404.
# The documented types only shape the OpenAPI schema.
_StrField = Annotated[Any, WithJsonSchema({"type": "string"})]
_BoolField = Annotated[Any, WithJsonSchema({"type": "boolean"})]


class TaskRead(BaseModel):
    """Wire shape of a task. Field aliases are the JSON keys."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    is_completed: bool = Field(alias="isCompleted")
    created_date: str = Field(alias="createdDate")


class TaskCreate(BaseModel):
    title: _StrField = Field(default=None, description="Non-empty after trimming")


class TaskUpdate(BaseModel):
    """Partial update. Only keys present in the body are applied.

    ``model_fields_set`` tells "not provided" apart from "provided as falsy",
    so ``{"isCompleted": false}`` is applied rather than ignored.
    """

    model_config = ConfigDict(extra="ignore")

    title: _StrField = Field(default=None, description="Non-empty after trimming")
    is_completed: _BoolField = Field(default=None, alias="isCompleted")

    def changes(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in self.model_fields_set}
