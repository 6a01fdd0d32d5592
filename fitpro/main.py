"""FitPro client - Entry point.

``FitProApp`` wires config, session, API client and services together and
offers the screen-level loaders; ``main`` is a small command line front end.
"""

import argparse
import asyncio
import json
import logging
from datetime import date, timedelta
from typing import Optional

import httpx

from .core.errors import APIError
from .core.macros import build_nutrition_day
from .core.models import (
    DashboardSnapshot,
    NutritionDay,
    UpdateMePayload,
    User,
    WorkoutRoutine,
    WorkoutSession,
    WorkoutStats,
)
from .core.reports import aggregate_daily, dashboard_snapshot, stats_from_summaries, ymd_key
from .core.streaks import active_routines, compute_workout_stats, newest_first
from .shell.api_client import APIClient
from .shell.auth import AuthService
from .shell.config import APIConfig
from .shell.exercises import ExerciseListQuery, ExercisesService
from .shell.nutrition import NutritionService
from .shell.session import KeyringTokenStore, SessionStore, TokenStore
from .shell.users import UsersService
from .shell.workouts import WorkoutsService


logger = logging.getLogger(__name__)

FALLBACK_PAGE_LIMIT = 200


class FitProApp:
    """Dependency container plus the loaders each screen calls."""

    def __init__(
        self,
        config: APIConfig,
        token_store: Optional[TokenStore] = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self.session = SessionStore(token_store)
        self.api = APIClient(config.base_url, self.session.token_provider, transport=transport)
        self.auth = AuthService(self.api)
        self.users = UsersService(self.api)
        self.exercises = ExercisesService(self.api)
        self.workouts = WorkoutsService(self.api)
        self.nutrition = NutritionService(self.api)

    async def aclose(self) -> None:
        await self.api.aclose()

    async def __aenter__(self) -> "FitProApp":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # ==================== Auth ====================

    async def login(self, email: str, password: str) -> User:
        """Log in and store the session token.

        Raises:
            ValueError: If email or password is empty
            APIError: If the backend rejects the login
        """
        if not email or not password:
            raise ValueError("Email and password are required.")
        response = await self.auth.login(email, password)
        self.session.set_logged_in(response.user.email, response.token)
        return response.user

    def logout(self) -> None:
        self.session.logout()

    # ==================== Screens ====================

    async def load_dashboard(self, days: int = 7, today: Optional[date] = None) -> DashboardSnapshot:
        """Today's and the last ``days`` days' exercise totals.

        Uses the server summary when available and falls back to aggregating
        one page of raw exercises client-side. An empty window (``days < 1``)
        yields an empty snapshot without any request.
        """
        today = today or date.today()
        if days < 1:
            return DashboardSnapshot()
        start = today - timedelta(days=days - 1)

        try:
            summaries = await self.exercises.summary(start, today)
        except APIError as e:
            logger.info("Server summary unavailable (%s), aggregating locally", e.message)
        else:
            snapshot = dashboard_snapshot(stats_from_summaries(summaries), ymd_key(today))
            latest = await self.exercises.list(ExerciseListQuery(start, today, page=1, limit=1))
            snapshot.last_exercise = latest.items[0] if latest.items else None
            return snapshot

        page = await self.exercises.list(
            ExerciseListQuery(start, today, page=1, limit=FALLBACK_PAGE_LIMIT)
        )
        snapshot = dashboard_snapshot(aggregate_daily(page.items, days, today), ymd_key(today))
        snapshot.last_exercise = page.items[0] if page.items else None
        return snapshot

    async def load_profile_stats(self) -> WorkoutStats:
        sessions = await self.workouts.list_sessions()
        return compute_workout_stats(sessions)

    async def load_active_routines(self) -> list[WorkoutRoutine]:
        return active_routines(await self.workouts.list_routines())

    async def load_history(self) -> list[WorkoutSession]:
        return newest_first(await self.workouts.list_sessions())

    async def load_nutrition(self, day: Optional[date] = None) -> NutritionDay:
        """Summary and meals for one day, fetched concurrently."""
        day = day or date.today()
        summary, meals = await asyncio.gather(
            self.nutrition.get_summary(day),
            self.nutrition.list_meals(day),
        )
        return build_nutrition_day(summary, meals)

    async def save_profile(self, payload: UpdateMePayload) -> User:
        """Update the profile; blank name or fitness level is sent as absent."""
        payload = payload.model_copy(
            update={
                "name": payload.name or None,
                "fitness_level": payload.fitness_level or None,
            }
        )
        return await self.users.update_me(payload)


def create_app(config: Optional[APIConfig] = None) -> FitProApp:
    """Create the app from the environment and restore any saved session."""
    config = config or APIConfig.from_env()
    app = FitProApp(
        config,
        token_store=KeyringTokenStore(config.keyring_service, config.keyring_account),
    )
    app.session.restore()
    return app


# ==================== Command line ====================


def _dump(value) -> str:
    if isinstance(value, list):
        value = [v.model_dump(mode="json", by_alias=True) for v in value]
    elif hasattr(value, "model_dump"):
        value = value.model_dump(mode="json", by_alias=True)
    return json.dumps(value, indent=2)


async def _run(args: argparse.Namespace) -> int:
    async with create_app() as app:
        if args.cmd == "login":
            result = await app.login(args.email, args.password)
        elif args.cmd == "logout":
            app.logout()
            return 0
        elif not app.session.is_logged_in:
            print("Not logged in. Run: fitpro login --email ... --password ...")
            return 1
        elif args.cmd == "whoami":
            result = await app.users.me()
        elif args.cmd == "dashboard":
            result = await app.load_dashboard(args.days)
        elif args.cmd == "stats":
            result = await app.load_profile_stats()
        elif args.cmd == "routines":
            result = await app.load_active_routines()
        else:
            day = date.fromisoformat(args.date) if args.date else None
            result = await app.load_nutrition(day)
    print(_dump(result))
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="FitPro command line client")
    parser.add_argument("--verbose", action="store_true")
    sub = parser.add_subparsers(dest="cmd", required=True)

    login = sub.add_parser("login")
    login.add_argument("--email", required=True)
    login.add_argument("--password", required=True)

    sub.add_parser("logout")
    sub.add_parser("whoami")

    dash = sub.add_parser("dashboard")
    dash.add_argument("--days", type=int, default=7)

    sub.add_parser("stats")
    sub.add_parser("routines")

    nutrition = sub.add_parser("nutrition")
    nutrition.add_argument("--date", help="YYYY-MM-DD (defaults to today)")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        return asyncio.run(_run(args))
    except (APIError, ValueError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
