"""
Wolfi Practice - Handwritten Answer Evaluator
Grades a photographed resolution with a multimodal completion provider.

Pipeline:
  sanitized EvaluationRequest
    → required fields + credential check          (no network on failure)
    → fetch image (httpx) → ImagePayload          (no completion call on failure)
    → prompts (evaluation_prompts.py) + image → provider.generate(...)
    → parse + validate → EvaluationResult
  Every failure resolves to the fallback evaluation for the exercise index.
"""

import asyncio
import functools
import logging
import math
from typing import Any, Optional

import httpx

from backend.fallbacks import fallback_evaluation
from backend.image_fetcher import ImageFetchError, fetch_image
from backend.json_extraction import parse_json_object
from backend.schemas import EvaluationRequest, EvaluationResult, PracticeResult
from prompts.evaluation_prompts import (
    EVALUATION_SYSTEM_PROMPT,
    EVALUATION_USER_PROMPT,
    NO_TEXT_ANSWER,
)

logger = logging.getLogger(__name__)

ALLOWED_RESULTS = {r.value for r in PracticeResult}


def coerce_score(value: Any) -> Optional[int]:
    """
    Numbers and numeric strings → integer in [0, 100], rounded half up.
    Returns None for anything that is not a finite number.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, int):
        return max(0, min(100, value))
    if not isinstance(value, float):
        return None
    return max(0, min(100, int(math.floor(value + 0.5))))


def validate_evaluation(data: dict) -> Optional[EvaluationResult]:
    """All fields must be valid; one bad field rejects the whole object."""
    result = data.get("result")
    if not isinstance(result, str) or result not in ALLOWED_RESULTS:
        return None

    score = coerce_score(data.get("score"))
    if score is None:
        return None

    feedback = data.get("feedbackSummary")
    if not isinstance(feedback, str) or not feedback.strip():
        return None

    return EvaluationResult(
        result=PracticeResult(result),
        score=score,
        feedback_summary=feedback.strip(),
    )


class AnswerEvaluator:

    def __init__(self, provider, temperature: float = 0.2,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.provider = provider
        self.temperature = temperature
        self._transport = transport

    async def evaluate(self, request: EvaluationRequest) -> EvaluationResult:
        index = request.exercise_index

        if request.statement is None:
            logger.warning("evaluateAnswer: missing statement")
            return fallback_evaluation(index)

        if request.image_url is None:
            logger.warning("evaluateAnswer: missing imageUrl")
            return fallback_evaluation(index)

        if not self.provider.is_available():
            logger.warning("evaluateAnswer: missing credential for %s", self.provider.name)
            return fallback_evaluation(index)

        # 1) image → inline payload
        try:
            async with httpx.AsyncClient(transport=self._transport, follow_redirects=True) as client:
                image = await fetch_image(request.image_url.strip(), client)
        except ImageFetchError as e:
            logger.error("evaluateAnswer: failed to fetch/convert image: %s", e)
            return fallback_evaluation(index)

        # 2) completion
        user_prompt = EVALUATION_USER_PROMPT.format(
            subtopic_name=request.subtopic_name,
            difficulty=request.difficulty.value,
            exercise_index=index,
            statement=request.statement,
            user_answer=request.user_answer or NO_TEXT_ANSWER,
        )

        try:
            loop = asyncio.get_event_loop()
            response = await loop.run_in_executor(
                None,
                functools.partial(
                    self.provider.generate,
                    EVALUATION_SYSTEM_PROMPT,
                    user_prompt,
                    image=image,
                    temperature=self.temperature,
                ),
            )
        except Exception as e:
            logger.error("evaluateAnswer: %s error: %s", self.provider.name, e, exc_info=True)
            return fallback_evaluation(index)

        if not response.text or not response.text.strip():
            logger.warning("evaluateAnswer: empty content from %s", response.provider)
            return fallback_evaluation(index)

        # 3) validation
        return self.parse_evaluation(response.text, index)

    def parse_evaluation(self, raw: str, exercise_index: int) -> EvaluationResult:
        try:
            data = parse_json_object(raw)
        except ValueError as e:
            logger.error("evaluateAnswer: failed to parse JSON: %s. Raw: %s", e, raw[:200])
            return fallback_evaluation(exercise_index)

        evaluation = validate_evaluation(data)
        if evaluation is None:
            logger.warning("evaluateAnswer: invalid fields from completion: %s", data)
            return fallback_evaluation(exercise_index)
        return evaluation
