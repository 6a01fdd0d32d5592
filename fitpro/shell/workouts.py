"""Workouts Service - routines (templates) and sessions (history)."""

from typing import Optional
from urllib.parse import quote

from ..core.models import (
    CreateRoutinePayload,
    CreateSessionPayload,
    VoidResponse,
    WorkoutRoutine,
    WorkoutSession,
)
from ..core.reports import ymd_key
from .api_client import APIClient
from .exercises import DayLike
from .request_builder import APIRequest, HTTPMethod


class WorkoutsService:
    def __init__(self, api: APIClient) -> None:
        self._api = api

    # ==================== Routines ====================

    async def list_routines(self) -> list[WorkoutRoutine]:
        request = APIRequest(path="/api/workouts")
        return await self._api.send(request, list[WorkoutRoutine]) or []

    async def create_routine(self, payload: CreateRoutinePayload) -> WorkoutRoutine:
        request = APIRequest(path="/api/workouts", method=HTTPMethod.POST, body=payload)
        return await self._api.send(request, WorkoutRoutine)

    async def update_routine(self, routine_id: str, payload: CreateRoutinePayload) -> WorkoutRoutine:
        request = APIRequest(
            path=f"/api/workouts/{quote(routine_id, safe='')}",
            method=HTTPMethod.PATCH,
            body=payload,
        )
        return await self._api.send(request, WorkoutRoutine)

    async def delete_routine(self, routine_id: str) -> None:
        request = APIRequest(
            path=f"/api/workouts/{quote(routine_id, safe='')}",
            method=HTTPMethod.DELETE,
        )
        await self._api.send(request, VoidResponse)

    # ==================== Sessions ====================

    async def create_session(self, payload: CreateSessionPayload) -> WorkoutSession:
        """Save one completed workout."""
        request = APIRequest(path="/api/workouts/sessions", method=HTTPMethod.POST, body=payload)
        return await self._api.send(request, WorkoutSession)

    async def list_sessions(
        self,
        from_date: Optional[DayLike] = None,
        to_date: Optional[DayLike] = None,
    ) -> list[WorkoutSession]:
        query = {}
        if from_date is not None:
            query["from"] = ymd_key(from_date)
        if to_date is not None:
            query["to"] = ymd_key(to_date)
        request = APIRequest(path="/api/workouts/sessions", query=query or None)
        return await self._api.send(request, list[WorkoutSession]) or []

    async def delete_session(self, session_id: str) -> None:
        request = APIRequest(
            path=f"/api/workouts/sessions/{quote(session_id, safe='')}",
            method=HTTPMethod.DELETE,
        )
        await self._api.send(request, VoidResponse)
