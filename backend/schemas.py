"""
Wolfi Practice - Request / Response Schemas
Pydantic models for both endpoints plus the input sanitizing helpers.

Request models never reject a body: every field is coerced in a
``mode="before"`` validator so that malformed input ends in a fallback
response instead of a 422.
"""

import math
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


MIN_EXERCISE_INDEX = 1
MAX_EXERCISE_INDEX = 3
DEFAULT_SUBTOPIC_NAME = "Derivadas"


class Difficulty(str, Enum):
    EASY   = "easy"
    MEDIUM = "medium"
    HARD   = "hard"


class ExerciseType(str, Enum):
    BASIC_PROCEDURAL     = "basic_procedural"
    MIXED_RULES          = "mixed_rules"
    APPLIED_WORD_PROBLEM = "applied_word_problem"
    EXAM_MULTI_STEP      = "exam_multi_step"


class PracticeResult(str, Enum):
    CORRECT   = "correct"
    PARTIAL   = "partial"
    INCORRECT = "incorrect"


# ─────────────────────────────────────────────────────────
# Sanitizers
# ─────────────────────────────────────────────────────────

def sanitize_exercise_index(value: Any) -> int:
    """
    Clamp any incoming value into {1, 2, 3}.

    Missing, zero, NaN and non-numeric values give 1; values below 1 give 1,
    values above 3 give 3, anything else is floored.
    """
    if value is None or isinstance(value, bool):
        return MIN_EXERCISE_INDEX
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return MIN_EXERCISE_INDEX
    if not isinstance(value, (int, float)):
        return MIN_EXERCISE_INDEX
    if value == 0 or (isinstance(value, float) and math.isnan(value)):
        return MIN_EXERCISE_INDEX
    if value < MIN_EXERCISE_INDEX:
        return MIN_EXERCISE_INDEX
    if value > MAX_EXERCISE_INDEX:
        return MAX_EXERCISE_INDEX
    return int(math.floor(value))


def sanitize_difficulty(value: Any) -> Difficulty:
    if isinstance(value, str):
        try:
            return Difficulty(value.strip().lower())
        except ValueError:
            pass
    return Difficulty.MEDIUM


def _optional_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (dict, list, bool)):
        return None
    text = str(value).strip()
    return text or None


def _as_object(body: Any) -> dict:
    return body if isinstance(body, dict) else {}


# ─────────────────────────────────────────────────────────
# Generate exercise
# ─────────────────────────────────────────────────────────

class ExerciseRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    subtopic_id: Optional[str]   = Field(default=None, alias="subtopicId")
    subtopic_name: Optional[str] = Field(default=None, alias="subtopicName")
    difficulty: Difficulty       = Difficulty.MEDIUM
    exercise_index: int          = Field(default=MIN_EXERCISE_INDEX, alias="exerciseIndex")
    goal: Optional[str]          = None

    @field_validator("subtopic_id", "subtopic_name", "goal", mode="before")
    @classmethod
    def _coerce_text(cls, v):
        return _optional_text(v)

    @field_validator("difficulty", mode="before")
    @classmethod
    def _coerce_difficulty(cls, v):
        return sanitize_difficulty(v)

    @field_validator("exercise_index", mode="before")
    @classmethod
    def _coerce_index(cls, v):
        return sanitize_exercise_index(v)

    @classmethod
    def from_body(cls, body: Any) -> "ExerciseRequest":
        return cls.model_validate(_as_object(body))


class ExerciseDefinition(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    statement: str
    exercise_type: ExerciseType = Field(alias="exerciseType")


class SubtopicContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    subtopic_name: str
    notes: Optional[str] = None
    topic_name: Optional[str] = None
    topic_year: Optional[int] = None
    topic_code: Optional[str] = None


# ─────────────────────────────────────────────────────────
# Evaluate answer
# ─────────────────────────────────────────────────────────

class EvaluationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    statement: Optional[str]  = None
    user_answer: str          = Field(default="", alias="userAnswer")
    image_url: Optional[str]  = Field(default=None, alias="imageUrl")
    subtopic_name: str        = Field(default=DEFAULT_SUBTOPIC_NAME, alias="subtopicName")
    difficulty: Difficulty    = Difficulty.MEDIUM
    exercise_index: int       = Field(default=MIN_EXERCISE_INDEX, alias="exerciseIndex")

    @field_validator("statement", "image_url", mode="before")
    @classmethod
    def _coerce_required_text(cls, v):
        # blank strings count as missing; the evaluator falls back on None
        return v if isinstance(v, str) and v.strip() else None

    @field_validator("user_answer", mode="before")
    @classmethod
    def _coerce_answer(cls, v):
        return _optional_text(v) or ""

    @field_validator("subtopic_name", mode="before")
    @classmethod
    def _coerce_subtopic(cls, v):
        return _optional_text(v) or DEFAULT_SUBTOPIC_NAME

    @field_validator("difficulty", mode="before")
    @classmethod
    def _coerce_difficulty(cls, v):
        return sanitize_difficulty(v)

    @field_validator("exercise_index", mode="before")
    @classmethod
    def _coerce_index(cls, v):
        return sanitize_exercise_index(v)

    @classmethod
    def from_body(cls, body: Any) -> "EvaluationRequest":
        return cls.model_validate(_as_object(body))


class EvaluationResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    result: PracticeResult
    score: int = Field(ge=0, le=100)
    feedback_summary: str = Field(alias="feedbackSummary", min_length=1)
