"""Exercises Service - logged exercises and their daily summaries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.models import CreateExercisePayload, DailySummary, Exercise, Paged
from ..core.reports import ymd_key
from .api_client import APIClient
from .request_builder import APIRequest, HTTPMethod


DayLike = date | str


@dataclass
class ExerciseListQuery:
    """Filters for listing exercises; dates are inclusive calendar days."""

    from_date: Optional[DayLike] = None
    to_date: Optional[DayLike] = None
    page: int = 1
    limit: int = 20

    def to_params(self) -> dict[str, str]:
        params = {"page": str(self.page), "limit": str(self.limit)}
        if self.from_date is not None:
            params["from"] = ymd_key(self.from_date)
        if self.to_date is not None:
            params["to"] = ymd_key(self.to_date)
        return params


class ExercisesService:
    def __init__(self, api: APIClient) -> None:
        self._api = api

    async def create(self, payload: CreateExercisePayload) -> Exercise:
        request = APIRequest(path="/api/exercises", method=HTTPMethod.POST, body=payload)
        return await self._api.send(request, Exercise)

    async def list(self, query: Optional[ExerciseListQuery] = None) -> Paged[Exercise]:
        """One page of exercises, newest first."""
        query = query or ExerciseListQuery()
        request = APIRequest(path="/api/exercises", query=query.to_params())
        return await self._api.send(request, Paged[Exercise])

    async def summary(self, from_date: DayLike, to_date: DayLike) -> list[DailySummary]:
        """Server-computed per-day totals for an inclusive range."""
        request = APIRequest(
            path="/api/exercises/summary",
            query={"from": ymd_key(from_date), "to": ymd_key(to_date)},
        )
        return await self._api.send(request, list[DailySummary]) or []

    async def last(self, name: str) -> Optional[Exercise]:
        """Most recent exercise with this name, or None if there is none."""
        request = APIRequest(path="/api/exercises/last", query={"name": name})
        return await self._api.send(request, Optional[Exercise])
