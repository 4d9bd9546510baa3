"""
Wolfi Practice - Exercise Type Hints
Chooses an ``exerciseType`` for a generation request from the subtopic name,
the session goal, the difficulty and the exercise position.

The rules are an ordered table of (predicate, type, reason): the first
predicate that matches wins, the last rows always match.
"""

import unicodedata
from dataclasses import dataclass
from typing import Callable, Optional

from backend.schemas import Difficulty, ExerciseType


@dataclass(frozen=True)
class HintInput:
    subtopic: str       # accent-folded, lowercase
    goal: str           # accent-folded, lowercase
    difficulty: Difficulty
    exercise_index: int


@dataclass(frozen=True)
class HintRule:
    predicate: Callable[[HintInput], bool]
    exercise_type: ExerciseType
    reason: str


def fold(text: Optional[str]) -> str:
    """Lowercase and strip accents ("Aplicações" → "aplicacoes")."""
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).lower()


def _mentions(*needles: str) -> Callable[[str], bool]:
    return lambda haystack: any(n in haystack for n in needles)


_exam          = _mentions("exame", "exam")
_applications  = _mentions("problema", "aplica", "otimiza", "optimiza", "modela", "taxa de varia", "contexto")
_composite     = _mentions("cadeia", "produto", "quociente", "composta", "regras")


HINT_RULES = [
    HintRule(lambda h: _exam(h.goal) or _exam(h.subtopic),
             ExerciseType.EXAM_MULTI_STEP, "exam preparation"),
    HintRule(lambda h: h.difficulty == Difficulty.HARD and h.exercise_index == 3,
             ExerciseType.EXAM_MULTI_STEP, "last exercise of a hard session"),
    HintRule(lambda h: _applications(h.subtopic),
             ExerciseType.APPLIED_WORD_PROBLEM, "applications subtopic"),
    HintRule(lambda h: _composite(h.subtopic) and h.exercise_index >= 2,
             ExerciseType.MIXED_RULES, "composite differentiation rules"),
    HintRule(lambda h: h.exercise_index == 1,
             ExerciseType.BASIC_PROCEDURAL, "first exercise"),
    HintRule(lambda h: h.exercise_index == 2,
             ExerciseType.MIXED_RULES, "second exercise"),
    HintRule(lambda h: True,
             ExerciseType.APPLIED_WORD_PROBLEM, "third exercise"),
]


def suggest_exercise_type(
    subtopic_name: Optional[str],
    difficulty: Difficulty = Difficulty.MEDIUM,
    exercise_index: int = 1,
    goal: Optional[str] = None,
) -> ExerciseType:
    hint = HintInput(
        subtopic=fold(subtopic_name),
        goal=fold(goal),
        difficulty=difficulty,
        exercise_index=exercise_index,
    )
    for rule in HINT_RULES:
        if rule.predicate(hint):
            return rule.exercise_type
    return ExerciseType.APPLIED_WORD_PROBLEM
