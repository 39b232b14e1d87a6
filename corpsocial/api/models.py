"""Pydantic request/response models for the CorpSocial API."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from corpsocial.config import SUMMARY_MAX_ENTRIES
from corpsocial.summary import Entry, SummaryResult, TextClassification, parse_moment


def _check_moment(value: str | None) -> str | None:
    if value is not None and parse_moment(value) is None:
        raise ValueError("must be an ISO-8601 date or date-time")
    return value


MAX_TEXT_LENGTH = 10_000


class EntryIn(BaseModel):
    text: str | None = Field(default=None, max_length=MAX_TEXT_LENGTH)
    created_at: str | None = Field(default=None, max_length=64)

    def to_entry(self) -> Entry:
        # Unparseable created_at is left for the extractor to skip
        return Entry(text=self.text or "", created_at=self.created_at)


class SummaryRequest(BaseModel):
    entries: list[EntryIn] = Field(default_factory=list, max_length=SUMMARY_MAX_ENTRIES)
    reference_day: str | None = None
    label: str | None = Field(default=None, max_length=100)

    @field_validator("reference_day")
    @classmethod
    def _validate_reference_day(cls, value: str | None) -> str | None:
        return _check_moment(value)


class SummaryCounts(BaseModel):
    tasks: int
    meetings: int
    calls: int
    others: int

    @classmethod
    def from_result(cls, result: SummaryResult) -> SummaryCounts:
        return cls(**result.as_dict())


class SummaryResponse(BaseModel):
    summary: SummaryCounts
    lines: list[str]
    title: str


class ClassifyRequest(BaseModel):
    text: str = Field(default="", max_length=MAX_TEXT_LENGTH)


class ClassifyResponse(BaseModel):
    is_task: bool
    is_meeting: bool
    is_call: bool
    is_other: bool

    @classmethod
    def from_classification(cls, classification: TextClassification) -> ClassifyResponse:
        return cls(**classification.as_dict())
