"""Record Schemas — Pydantic request models generated from ResourceKind descriptors.

Invariants:
    - Strings are whitespace-stripped before length checks; stripped values are stored
    - Create models require every required field; update models make all fields optional
    - Unknown keys are ignored (never reach storage)
    - tags: optional list, each tag 1-50 chars after stripping

Design Decisions:
    - create_model over four hand-written classes: descriptor is the single source of truth
    - Pydantic reports every violated field at once, surfaced as a 400 field list
"""

from functools import lru_cache
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, create_model

from portfolio.core.resource_kinds import (
    TAG_MAX_LENGTH, TAG_MIN_LENGTH, FieldSpec, ResourceKind,
)

Tag = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True,
        min_length=TAG_MIN_LENGTH,
        max_length=TAG_MAX_LENGTH,
    ),
]


class RecordPayload(BaseModel):
    """Base for generated payload models."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    def to_fields(self) -> dict[str, Any]:
        """Supplied, non-null values only."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


def _field_definition(spec: FieldSpec, partial: bool) -> tuple[Any, Any]:
    constraints = Field(min_length=spec.min_length, max_length=spec.max_length)
    if spec.required and not partial:
        return (str, constraints)
    return (
        str | None,
        Field(None, min_length=spec.min_length, max_length=spec.max_length),
    )


@lru_cache
def create_schema(kind: ResourceKind) -> type[RecordPayload]:
    """Payload model for POST /api/{kind}."""
    definitions = {
        spec.name: _field_definition(spec, partial=False) for spec in kind.fields
    }
    return create_model(
        f"{_class_stem(kind)}Create",
        __base__=RecordPayload,
        **definitions,
        tags=(list[Tag] | None, None),
    )


@lru_cache
def update_schema(kind: ResourceKind) -> type[RecordPayload]:
    """Payload model for PUT /api/{kind}/{id}: same bounds, nothing required."""
    definitions = {
        spec.name: _field_definition(spec, partial=True) for spec in kind.fields
    }
    return create_model(
        f"{_class_stem(kind)}Update",
        __base__=RecordPayload,
        **definitions,
        tags=(list[Tag] | None, None),
    )


def _class_stem(kind: ResourceKind) -> str:
    return "".join(part.capitalize() for part in kind.slug.split("-"))
