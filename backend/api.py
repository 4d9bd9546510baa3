"""
Wolfi Practice - FastAPI Backend
================================
Two endpoints for the Matemática A practice sessions:

  POST /api/generateExercise  — one exercise statement + exerciseType
  POST /api/evaluateAnswer    — grade a photographed handwritten resolution

Both always answer 200 with a schema-valid body; when the completion service,
the network or the model output cannot be trusted, a deterministic fallback
keyed by exercise index is returned instead. Other methods get 405.
"""

import os
import asyncio
import functools
import logging
import time
from typing import Any, Optional
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException
from dotenv import load_dotenv

load_dotenv()

from backend.answer_evaluator import AnswerEvaluator
from backend.context_resolver import resolve_subtopic_context
from backend.database import get_db, init_db
from backend.exercise_generator import ExerciseGenerator
from backend.fallbacks import fallback_evaluation, fallback_exercise
from backend.llm_provider import provider_from_env
from backend.schemas import (
    EvaluationRequest,
    EvaluationResult,
    ExerciseDefinition,
    ExerciseRequest,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


# ─────────────────────────────────────────────────────────
# Pipelines (lazy init, singletons)
# ─────────────────────────────────────────────────────────

_generator: Optional[ExerciseGenerator] = None
_evaluator: Optional[AnswerEvaluator] = None


def get_exercise_generator() -> ExerciseGenerator:
    global _generator
    if _generator is None:
        _generator = ExerciseGenerator(
            provider=provider_from_env("EXERCISE_LLM_PROVIDER", "openai"),
            temperature=float(os.getenv("EXERCISE_TEMPERATURE", "0.4")),
        )
    return _generator


def get_answer_evaluator() -> AnswerEvaluator:
    global _evaluator
    if _evaluator is None:
        _evaluator = AnswerEvaluator(
            provider=provider_from_env("EVALUATION_LLM_PROVIDER", "gemini"),
            temperature=float(os.getenv("EVALUATION_TEMPERATURE", "0.2")),
        )
    return _evaluator


# ─────────────────────────────────────────────────────────
# App setup
# ─────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Wolfi Practice API started.")
    yield
    logger.info("Wolfi Practice API shutting down.")

app = FastAPI(
    title="Wolfi Practice API",
    description="Exercise generation and handwritten answer grading for Matemática A.",
    version=API_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        return JSONResponse(
            status_code=405,
            content={"error": "Method Not Allowed"},
            headers=exc.headers,
        )
    return await http_exception_handler(request, exc)


# ─────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────

async def _read_body(request: Request) -> Any:
    """Decoded JSON body, or an empty object when the body is not JSON."""
    try:
        return await request.json()
    except ValueError as e:
        logger.warning("%s: invalid JSON body: %s", request.url.path, e)
        return {}


# ─────────────────────────────────────────────────────────
# Endpoints
# ─────────────────────────────────────────────────────────

@app.get("/")
async def root():
    return {
        "message": "Wolfi Practice API is running.",
        "version": API_VERSION,
        "endpoints": ["/api/generateExercise", "/api/evaluateAnswer", "/health"],
    }


@app.get("/health")
async def health():
    return {"status": "ok", "timestamp": time.time()}


# ── Generate exercise ─────────────────────────────────────

@app.post("/api/generateExercise", response_model=ExerciseDefinition,
          summary="Generate one practice exercise")
async def generate_exercise(
    request: Request,
    db: Session = Depends(get_db),
    generator: ExerciseGenerator = Depends(get_exercise_generator),
):
    exercise_request = ExerciseRequest.from_body(await _read_body(request))

    try:
        loop = asyncio.get_event_loop()
        context = await loop.run_in_executor(
            None,
            functools.partial(
                resolve_subtopic_context,
                db,
                subtopic_id=exercise_request.subtopic_id,
                subtopic_name=exercise_request.subtopic_name,
            ),
        )
        return await generator.generate(exercise_request, context)
    except Exception as e:
        logger.error("Error in /api/generateExercise: %s", e, exc_info=True)
        return fallback_exercise(exercise_request.exercise_index)


# ── Evaluate answer ───────────────────────────────────────

@app.post("/api/evaluateAnswer", response_model=EvaluationResult,
          summary="Grade a photographed handwritten resolution")
async def evaluate_answer(
    request: Request,
    evaluator: AnswerEvaluator = Depends(get_answer_evaluator),
):
    evaluation_request = EvaluationRequest.from_body(await _read_body(request))

    try:
        return await evaluator.evaluate(evaluation_request)
    except Exception as e:
        logger.error("Error in /api/evaluateAnswer: %s", e, exc_info=True)
        return fallback_evaluation(evaluation_request.exercise_index)


# ─────────────────────────────────────────────────────────
# Run
# ─────────────────────────────────────────────────────────

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "backend.api:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        reload_excludes=["tests/*", "*.pyc"],
    )
