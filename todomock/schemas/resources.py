"""Resource Schemas — Pydantic models with field-level validation for label and todo writes.

Invariants:
    - *Create models require a title; *Update models require an id and nothing else
    - Fields supplied in the payload are reported by supplied_fields(); absent ones never are
    - Todo labels accept id strings or label objects carrying an id, de-duplicated in order
    - Any validation failure surfaces as MalformedInputError before the Store is touched

Design Decisions:
    - Wire names (dueDate, completedAt) are aliases; population by attribute name also works
    - Unknown fields are ignored, matching the loose JSON the boundary receives
"""

from datetime import datetime
from typing import Any, ClassVar, Mapping, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from todomock.core.errors import MalformedInputError


class _WritePayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # Attributes that may be omitted but never set to null
    NOT_NULLABLE: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        for name in self.NOT_NULLABLE:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def supplied_fields(self) -> dict[str, Any]:
        """Supplied fields only, keyed by wire name."""
        return self.model_dump(by_alias=True, include=self.model_fields_set)


# ─── Labels ──────────────────────────────────────────────────────

class LabelCreate(_WritePayload):
    """Label creation: id is optional and generated when absent."""
    id: str | None = Field(None, min_length=1)
    title: str
    color: str | None = None


class LabelUpdate(_WritePayload):
    """Label update: shallow merge of supplied fields."""
    NOT_NULLABLE: ClassVar[tuple[str, ...]] = ("title",)

    id: str = Field(min_length=1)
    title: str | None = None
    color: str | None = None


# ─── Todos ───────────────────────────────────────────────────────

def _label_reference(item: Any) -> str:
    if isinstance(item, str) and item:
        return item
    if isinstance(item, Mapping) and isinstance(item.get("id"), str) and item["id"]:
        return item["id"]
    raise ValueError("label references must be ids or objects with an id")


class _TodoFields(_WritePayload):
    labels: list[str] | None = None
    due_date: datetime | None = Field(None, alias="dueDate")
    completed_at: datetime | None = Field(None, alias="completedAt")

    @field_validator("labels", mode="before")
    @classmethod
    def labels_to_ids(cls, v: Any) -> Any:
        if v is None:
            return v
        if not isinstance(v, (list, tuple)):
            raise ValueError("labels must be a list")
        return list(dict.fromkeys(_label_reference(item) for item in v))


class TodoCreate(_TodoFields):
    """Todo creation: completed defaults to False, completedAt derived unless supplied."""
    id: str | None = Field(None, min_length=1)
    title: str
    completed: bool = False


class TodoUpdate(_TodoFields):
    """Todo update: shallow merge; completedAt re-derived unless supplied."""
    NOT_NULLABLE: ClassVar[tuple[str, ...]] = ("title", "completed", "labels")

    id: str = Field(min_length=1)
    title: str | None = None
    completed: bool | None = None


# ─── Parsing ─────────────────────────────────────────────────────

P = TypeVar("P", bound=_WritePayload)


def parse_payload(model: type[P], payload: Any, resource: str) -> P:
    """Validate a raw payload or raise MalformedInputError."""
    if isinstance(payload, model):
        return payload
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(by_alias=True, exclude_unset=True)
    if not isinstance(payload, Mapping):
        raise MalformedInputError(
            f"{resource} payload must be a JSON object", resource,
        )
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        details = [
            {
                "field": ".".join(str(loc) for loc in err["loc"]),
                "message": err["msg"],
                "type": err["type"],
            }
            for err in e.errors()
        ]
        raise MalformedInputError(
            f"Invalid {resource} payload", resource, details,
        ) from e
