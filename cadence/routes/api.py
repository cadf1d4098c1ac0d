from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from cadence.config import get_settings
from cadence.errors import RecurrenceError
from cadence.services.intervals import estimate_duration_ms, normalize_interval
from cadence.services.rule import RecurrenceRule

api_router = APIRouter(tags=["api"])


class IntervalRequest(BaseModel):
    interval: dict[str, int] = Field(default_factory=dict)


class RuleRequest(BaseModel):
    start: str = Field(min_length=1)
    interval: dict[str, int] = Field(default_factory=dict)
    timezone: str | None = Field(default=None, max_length=64)


class OccurrenceRequest(RuleRequest):
    index: int = Field(ge=0)


class FirstRequest(RuleRequest):
    count: int = Field(ge=0)


class BetweenRequest(RuleRequest):
    model_config = ConfigDict(populate_by_name=True)

    range_start: str = Field(alias="from", min_length=1)
    range_end: str = Field(alias="to", min_length=1)


def _build_rule(payload: RuleRequest) -> RecurrenceRule:
    tz_name = payload.timezone or get_settings().default_timezone
    try:
        return RecurrenceRule(payload.start, payload.interval, tz_name)
    except RecurrenceError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _serialize_occurrences(occurrences: list[datetime]) -> dict[str, object]:
    return {
        "count": len(occurrences),
        "occurrences": [occurrence.isoformat() for occurrence in occurrences],
    }


@api_router.get("/health")
def health_check() -> dict[str, str]:
    return {"status": "ok"}


@api_router.post("/intervals/average")
def interval_average(payload: IntervalRequest) -> dict[str, object]:
    try:
        interval = normalize_interval(payload.interval)
    except RecurrenceError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {
        "interval": interval.as_dict(),
        "average_ms": estimate_duration_ms(interval),
    }


@api_router.post("/rules/occurrence")
def rule_occurrence(payload: OccurrenceRequest) -> dict[str, object]:
    rule = _build_rule(payload)
    try:
        occurrence = rule.occurrence(payload.index)
    except RecurrenceError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"index": payload.index, "occurrence": occurrence.isoformat()}


@api_router.post("/rules/first")
def rule_first(payload: FirstRequest) -> dict[str, object]:
    max_results = get_settings().max_results
    if payload.count > max_results:
        raise HTTPException(status_code=400, detail=f"count must not exceed {max_results}.")
    rule = _build_rule(payload)
    try:
        occurrences = rule.first(payload.count)
    except RecurrenceError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _serialize_occurrences(occurrences)


@api_router.post("/rules/between")
def rule_between(payload: BetweenRequest) -> dict[str, object]:
    rule = _build_rule(payload)
    try:
        occurrences = rule.between(payload.range_start, payload.range_end, limit=get_settings().max_results)
    except RecurrenceError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _serialize_occurrences(occurrences)
