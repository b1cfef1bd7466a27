"""Pydantic input models for operations that take structured payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ValidationFailedError
from .models import AnnotationType


class PositionInput(BaseModel):
    x: float = 0
    y: float = 0


class AnnotationDraft(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: AnnotationType
    page_number: int = Field(default=1, ge=1, alias="pageNumber")
    position: PositionInput = Field(default_factory=PositionInput)
    content: str = ""
    style: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("page_number", mode="before")
    @classmethod
    def _default_page(cls, value: Any) -> Any:
        return 1 if value is None else value

    @field_validator("position", mode="before")
    @classmethod
    def _default_position(cls, value: Any) -> Any:
        return PositionInput() if value is None else value

    @field_validator("content", mode="before")
    @classmethod
    def _default_content(cls, value: Any) -> Any:
        return "" if value is None else value


class AnnotationUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: Optional[AnnotationType] = None
    page_number: Optional[int] = Field(default=None, ge=1, alias="pageNumber")
    position: Optional[PositionInput] = None
    content: Optional[str] = None
    style: Optional[Dict[str, Any]] = None


class FolderUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    parent_id: Optional[str] = Field(default=None, alias="parentId")


class MetadataUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[List[str]] = None


class SearchParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    keyword: Optional[str] = None
    file_types: List[str] = Field(default_factory=list, alias="fileTypes")
    tags: List[str] = Field(default_factory=list)
    date_from: Optional[datetime] = Field(default=None, alias="dateFrom")
    date_to: Optional[datetime] = Field(default=None, alias="dateTo")

    @field_validator("keyword")
    @classmethod
    def _strip_keyword(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None


def parse_input(model: type[BaseModel], payload: Any) -> BaseModel:
    """Coerce a mapping (or an existing model) into ``model``, raising ``ValidationFailedError``."""
    if isinstance(payload, model):
        return payload
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(exclude_unset=True)
    try:
        return model.model_validate(payload or {})
    except ValidationError as exc:
        raise ValidationFailedError(f"Invalid {model.__name__}: {exc.errors()[0]['msg']}") from exc
