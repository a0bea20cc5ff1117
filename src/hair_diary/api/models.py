"""Pydantic models for the entry form payload."""

import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hair_diary.domain.entries import EntryDraft, Formula
from hair_diary.numbers import float_or_zero, int_or_zero, optional_float


class FormulaForm(BaseModel):
    """One formula row of the form."""

    shade: str = Field(min_length=1)
    parts: int = Field(default=0, ge=0)
    color: float = Field(default=0.0, ge=0)

    @field_validator("parts", mode="before")
    @classmethod
    def _coerce_parts(cls, value: object) -> int:
        return int_or_zero(value)

    @field_validator("color", mode="before")
    @classmethod
    def _coerce_color(cls, value: object) -> float:
        return float_or_zero(value)


class EntryForm(BaseModel):
    """Entry form submission for both new and edited entries."""

    model_config = ConfigDict(populate_by_name=True)

    date: datetime.date = Field(default_factory=datetime.date.today)
    name: str = Field(min_length=1)
    formulas: list[FormulaForm] = Field(min_length=1)
    developer: float | None = Field(default=None, ge=0)
    processing_time: int = Field(default=0, ge=0, alias="processingTime")
    notes: str = ""

    @field_validator("developer", mode="before")
    @classmethod
    def _coerce_developer(cls, value: object) -> float | None:
        return optional_float(value)

    @field_validator("processing_time", mode="before")
    @classmethod
    def _coerce_processing_time(cls, value: object) -> int:
        return int_or_zero(value)

    def to_draft(self) -> EntryDraft:
        """Convert the submission into a domain draft."""
        return EntryDraft(
            date=self.date.isoformat(),
            name=self.name,
            formulas=tuple(
                Formula(shade=row.shade, parts=row.parts, color=row.color)
                for row in self.formulas
            ),
            developer=self.developer,
            processing_time=self.processing_time,
            notes=self.notes,
        )
