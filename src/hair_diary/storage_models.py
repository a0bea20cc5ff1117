"""Pydantic models for the persisted diary blob.

The blob lives under a single storage key. Version 1 is written as::

    {"version": 1, "entries": [{"id": ..., "processingTime": ..., ...}]}

A bare JSON array of entries is the older layout and is read as version 1.
Photos are never part of the blob.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hair_diary.domain.entries import Entry, Formula
from hair_diary.numbers import float_or_zero, int_or_zero, optional_float

SCHEMA_VERSION = 1


class StoredFormula(BaseModel):
    """Formula line as persisted."""

    shade: str = ""
    parts: int = 0
    color: float = 0.0

    @field_validator("parts", mode="before")
    @classmethod
    def _coerce_parts(cls, value: object) -> int:
        return int_or_zero(value)

    @field_validator("color", mode="before")
    @classmethod
    def _coerce_color(cls, value: object) -> float:
        return float_or_zero(value)


class StoredEntry(BaseModel):
    """Entry as persisted, with camelCase field names."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(min_length=1)
    date: str
    name: str = ""
    formulas: list[StoredFormula] = Field(min_length=1)
    developer: float | None = None
    processing_time: int = Field(default=0, alias="processingTime")
    notes: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("developer", mode="before")
    @classmethod
    def _coerce_developer(cls, value: object) -> float | None:
        return optional_float(value)

    @field_validator("processing_time", mode="before")
    @classmethod
    def _coerce_processing_time(cls, value: object) -> int:
        return int_or_zero(value)

    @classmethod
    def from_entry(cls, entry: Entry) -> "StoredEntry":
        """Build the persisted form of an entry, photos left out."""
        return cls(
            id=entry.id,
            date=entry.date,
            name=entry.name,
            formulas=[
                StoredFormula(shade=f.shade, parts=f.parts, color=f.color)
                for f in entry.formulas
            ],
            developer=entry.developer,
            processing_time=entry.processing_time,
            notes=entry.notes,
        )

    def to_entry(self) -> Entry:
        """Build the domain entry this record describes."""
        return Entry(
            id=self.id,
            date=self.date,
            name=self.name,
            formulas=tuple(
                Formula(shade=f.shade, parts=f.parts, color=f.color)
                for f in self.formulas
            ),
            developer=self.developer,
            processing_time=self.processing_time,
            notes=self.notes,
        )


class StoredDiary(BaseModel):
    """Versioned envelope around the entry list."""

    version: int = SCHEMA_VERSION
    entries: list[StoredEntry] = Field(default_factory=list)
