"""Nutrition Service - meals and the server-computed daily summary."""

from datetime import date
from urllib.parse import quote

from ..core.models import CreateMealPayload, Meal, NutritionSummary, VoidResponse
from ..core.reports import ymd_key
from .api_client import APIClient
from .request_builder import APIRequest, HTTPMethod


class NutritionService:
    def __init__(self, api: APIClient) -> None:
        self._api = api

    async def get_summary(self, day: date) -> NutritionSummary:
        request = APIRequest(path="/api/nutrition/summary", query={"date": ymd_key(day)})
        return await self._api.send(request, NutritionSummary)

    async def list_meals(self, day: date) -> list[Meal]:
        """Meals logged on a single calendar day."""
        key = ymd_key(day)
        request = APIRequest(path="/api/nutrition/meals", query={"from": key, "to": key})
        return await self._api.send(request, list[Meal]) or []

    async def create_meal(self, payload: CreateMealPayload) -> Meal:
        request = APIRequest(path="/api/nutrition/meals", method=HTTPMethod.POST, body=payload)
        return await self._api.send(request, Meal)

    async def delete_meal(self, meal_id: str) -> None:
        request = APIRequest(
            path=f"/api/nutrition/meals/{quote(meal_id, safe='')}",
            method=HTTPMethod.DELETE,
        )
        await self._api.send(request, VoidResponse)
