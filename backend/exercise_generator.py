"""
Wolfi Practice - Exercise Generator
Generates one practice exercise per call through a completion provider.

Pipeline:
  sanitized ExerciseRequest + optional SubtopicContext
    → prompts (exercise_prompts.py) with an exercise-type hint
    → provider.generate(...) in a worker thread, JSON mode
    → parse + validate → ExerciseDefinition
  Any failure on the way gives the fallback exercise for the index.
"""

import asyncio
import functools
import logging
from typing import Optional

from backend.exercise_types import suggest_exercise_type
from backend.fallbacks import fallback_exercise
from backend.json_extraction import parse_json_object
from backend.schemas import (
    DEFAULT_SUBTOPIC_NAME,
    ExerciseDefinition,
    ExerciseRequest,
    ExerciseType,
    SubtopicContext,
)
from prompts.exercise_prompts import (
    CURRICULUM_SECTION,
    EXERCISE_SYSTEM_PROMPT,
    EXERCISE_USER_PROMPT,
    GOAL_SECTION,
)

logger = logging.getLogger(__name__)

VALID_EXERCISE_TYPES = {t.value for t in ExerciseType}


class ExerciseGenerator:

    def __init__(self, provider, temperature: float = 0.4):
        self.provider = provider
        self.temperature = temperature

    # ─────────────────────────────────────────────────────
    # Public API
    # ─────────────────────────────────────────────────────

    async def generate(
        self,
        request: ExerciseRequest,
        context: Optional[SubtopicContext] = None,
    ) -> ExerciseDefinition:
        index = request.exercise_index
        subtopic_name = self._subtopic_label(request, context)
        hint = suggest_exercise_type(
            subtopic_name, request.difficulty, index, goal=request.goal,
        )

        if not self.provider.is_available():
            logger.warning("generateExercise: missing credential for %s", self.provider.name)
            return fallback_exercise(index)

        user_prompt = self._build_user_prompt(request, subtopic_name, hint, context)

        try:
            loop = asyncio.get_event_loop()
            response = await loop.run_in_executor(
                None,
                functools.partial(
                    self.provider.generate,
                    EXERCISE_SYSTEM_PROMPT,
                    user_prompt,
                    temperature=self.temperature,
                    json_mode=True,
                ),
            )
        except Exception as e:
            logger.error("generateExercise: %s call failed: %s", self.provider.name, e, exc_info=True)
            return fallback_exercise(index)

        if not response.text or not response.text.strip():
            logger.warning("generateExercise: empty content from %s", response.provider)
            return fallback_exercise(index)

        return self.parse_exercise(response.text, index, hint)

    # ─────────────────────────────────────────────────────
    # Prompt building
    # ─────────────────────────────────────────────────────

    @staticmethod
    def _subtopic_label(request: ExerciseRequest, context: Optional[SubtopicContext]) -> str:
        if context is not None:
            return context.subtopic_name
        return request.subtopic_name or DEFAULT_SUBTOPIC_NAME

    def _build_user_prompt(
        self,
        request: ExerciseRequest,
        subtopic_name: str,
        hint: ExerciseType,
        context: Optional[SubtopicContext],
    ) -> str:
        curriculum_section = ""
        if context is not None:
            curriculum_section = CURRICULUM_SECTION.format(
                topic_name=context.topic_name or "-",
                topic_year=f"{context.topic_year}.º" if context.topic_year else "-",
                topic_code=context.topic_code or "-",
                notes=context.notes or "-",
            )

        goal_section = GOAL_SECTION.format(goal=request.goal) if request.goal else ""

        return EXERCISE_USER_PROMPT.format(
            subtopic_name=subtopic_name,
            difficulty=request.difficulty.value,
            exercise_index=request.exercise_index,
            exercise_type_hint=hint.value,
            curriculum_section=curriculum_section,
            goal_section=goal_section,
        )

    # ─────────────────────────────────────────────────────
    # Response parser
    # ─────────────────────────────────────────────────────

    def parse_exercise(self, raw: str, exercise_index: int, hint: ExerciseType) -> ExerciseDefinition:
        """
        A missing or blank statement discards the whole response; an unknown
        exerciseType only replaces that field with the hint.
        """
        try:
            data = parse_json_object(raw)
        except ValueError as e:
            logger.error("generateExercise: failed to parse JSON: %s. Raw: %s", e, raw[:200])
            return fallback_exercise(exercise_index)

        statement = data.get("statement")
        if not isinstance(statement, str) or not statement.strip():
            logger.warning("generateExercise: invalid statement in %s", data)
            return fallback_exercise(exercise_index)

        exercise_type = data.get("exerciseType")
        if not isinstance(exercise_type, str) or exercise_type not in VALID_EXERCISE_TYPES:
            logger.info("generateExercise: exerciseType %r replaced by hint %s", exercise_type, hint.value)
            exercise_type = hint

        return ExerciseDefinition(
            statement=statement.strip(),
            exercise_type=ExerciseType(exercise_type),
        )
