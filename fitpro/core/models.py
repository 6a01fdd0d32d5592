"""Core Data Models - Pydantic models for type safety.

Wire shapes follow the backend: camelCase field names, Mongo-style ``_id``
identifiers and ``user`` owner references. All models are value objects with
no behavior beyond validation.
"""

from datetime import datetime
from enum import Enum
from typing import Generic, Optional, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


T = TypeVar("T")


def _id_field(**kwargs) -> object:
    """Identifier sent as ``_id`` by the backend (``id`` is accepted too)."""
    return Field(
        validation_alias=AliasChoices("_id", "id"),
        serialization_alias="_id",
        **kwargs,
    )


class WireModel(BaseModel):
    """Base for everything that crosses the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ==================== Users ====================


class Goals(WireModel):
    """Training goals nested inside a user profile."""

    goal_type: Optional[str] = None
    target_weight_kg: Optional[float] = None
    weekly_workouts: Optional[int] = None


class User(WireModel):
    """User profile as returned by the backend."""

    id: str = _id_field()
    email: str
    name: str
    gender: Optional[str] = None
    fitness_level: Optional[str] = None
    age: Optional[int] = None
    height_cm: Optional[float] = None
    weight_kg: Optional[float] = None
    goals: Optional[Goals] = None
    created_at: Optional[datetime] = None


class LoginResponse(WireModel):
    """Payload of a successful login: ``{user, token}``."""

    user: User
    token: str


class VoidResponse(WireModel):
    """Payload of endpoints that only report success."""


class Credentials(WireModel):
    email: str
    password: str


class SignupPayload(WireModel):
    email: str
    name: str
    age: int
    password: str


class GoalsPayload(WireModel):
    goal_type: Optional[str] = None
    target_weight_kg: Optional[float] = None
    weekly_workouts: Optional[int] = None


class UpdateMePayload(WireModel):
    """Partial profile update; absent fields are left unchanged by the server."""

    name: Optional[str] = None
    fitness_level: Optional[str] = None
    age: Optional[int] = None
    height_cm: Optional[float] = None
    weight_kg: Optional[float] = None
    goals: Optional[GoalsPayload] = None


# ==================== Exercises ====================


class Exercise(WireModel):
    """A single logged exercise."""

    id: str = _id_field()
    user_id: str = Field(alias="user")
    name: str
    category: Optional[str] = None
    sets: Optional[int] = None
    reps: Optional[int] = None
    weight_kg: Optional[float] = None
    duration_min: Optional[float] = None
    calories: Optional[float] = None
    notes: Optional[str] = None
    performed_at: datetime


class CreateExercisePayload(WireModel):
    name: str = Field(min_length=1)
    category: Optional[str] = None
    sets: Optional[int] = None
    reps: Optional[int] = None
    weight_kg: Optional[float] = None
    duration_min: Optional[float] = None
    calories: Optional[float] = None
    notes: Optional[str] = None
    performed_at: Optional[datetime] = None


class Paged(WireModel, Generic[T]):
    """Pagination envelope wrapping any list endpoint."""

    items: list[T]
    total: int
    page: int
    limit: Optional[int] = None
    pages: Optional[int] = None


class DailySummary(WireModel):
    """Per-day exercise totals computed by the server."""

    date: str = Field(description="Calendar day (YYYY-MM-DD)")
    total_duration_min: Optional[float] = None
    total_calories: Optional[float] = None
    count: int


class DailyStat(WireModel):
    """Per-day exercise totals, never persisted."""

    date: str = Field(description="Calendar day (YYYY-MM-DD)")
    total_duration_min: float = 0
    total_calories: float = 0
    count: int = 0


class DashboardSnapshot(WireModel):
    """Today's numbers plus totals over the whole range."""

    today_workouts: int = 0
    today_minutes: float = 0
    today_calories: float = 0
    total_workouts: int = 0
    total_minutes: float = 0
    total_calories: float = 0
    last_exercise: Optional[Exercise] = None


# ==================== Workouts ====================


class RoutineExercise(WireModel):
    """Exercise template inside a routine."""

    name: str
    description: Optional[str] = None
    body_part: Optional[str] = None
    default_sets: Optional[int] = None
    default_reps: Optional[int] = None
    default_weight_kg: Optional[float] = None
    order: Optional[int] = None


class WorkoutRoutine(WireModel):
    """Reusable workout template ("Arms Day", "Legs", ...)."""

    id: str = _id_field()
    name: str
    notes: Optional[str] = None
    exercises: list[RoutineExercise] = Field(default_factory=list)
    is_archived: Optional[bool] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CreateRoutinePayload(WireModel):
    name: str = Field(min_length=1)
    notes: Optional[str] = None
    exercises: list[RoutineExercise] = Field(default_factory=list)


class RoutineRef(WireModel):
    id: str = _id_field()
    name: str


class SetEntry(WireModel):
    """One set inside an exercise; ``index`` is 1-based."""

    index: int = Field(ge=1)
    weight_kg: Optional[float] = None
    reps: Optional[int] = None
    duration_sec: Optional[int] = None
    calories: Optional[float] = None
    notes: Optional[str] = None


class ExerciseEntry(WireModel):
    name: str
    notes: Optional[str] = None
    sets: list[SetEntry] = Field(default_factory=list)


class WorkoutSession(WireModel):
    """One completed workout."""

    id: str = _id_field()
    user_id: str = Field(alias="user")
    routine: Optional[RoutineRef] = Field(default=None, alias="workoutRoutine")
    started_at: datetime
    finished_at: Optional[datetime] = None
    duration_sec: Optional[int] = None
    exercises: list[ExerciseEntry] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SetPayload(WireModel):
    index: int = Field(ge=1)
    weight_kg: Optional[float] = None
    reps: Optional[int] = None
    duration_sec: Optional[int] = None
    calories: Optional[float] = None


class SessionExercisePayload(WireModel):
    name: str
    sets: list[SetPayload]


class CreateSessionPayload(WireModel):
    routine_id: str
    started_at: datetime
    finished_at: datetime
    exercises: list[SessionExercisePayload]


class WorkoutStats(WireModel):
    """Profile statistics derived from session history."""

    total_workouts: int = 0
    total_volume_kg: float = 0
    current_streak: int = 0
    longest_streak: int = 0
    weekly_workouts: int = 0


# ==================== Nutrition ====================


class MealType(str, Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"
    OTHER = "other"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class Meal(WireModel):
    """A logged meal."""

    id: str = _id_field()
    user: str
    date: datetime
    type: MealType
    title: str
    time: Optional[datetime] = None
    description: Optional[str] = None
    calories: int
    protein_g: int
    carbs_g: int
    fats_g: int


class CreateMealPayload(WireModel):
    date: datetime
    type: MealType
    title: str = Field(min_length=1)
    calories: int = Field(ge=0)
    protein_g: int = Field(ge=0)
    carbs_g: int = Field(ge=0)
    fats_g: int = Field(ge=0)


class CalorieData(WireModel):
    eaten: int
    burned: int
    goal: int


class MacroDetail(WireModel):
    grams: int
    target: int


class MacroData(WireModel):
    protein: MacroDetail
    carbs: MacroDetail
    fats: MacroDetail


class NutritionSummary(WireModel):
    """Server-computed nutrition summary for one day."""

    date: str
    calories: CalorieData
    macros: MacroData


class NutritionDay(WireModel):
    """A day's nutrition summary, meals and derived display numbers."""

    summary: Optional[NutritionSummary] = None
    meals: list[Meal] = Field(default_factory=list)
    calories_left: int = 0
    ring_progress: float = 0
