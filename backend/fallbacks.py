"""
Wolfi Practice - Deterministic Fallbacks
Canned responses served whenever the completion service cannot produce a
trustworthy result. Keyed by the (already sanitized) exercise index; any index
that is not 1 or 2 maps to the third entry.
"""

from backend.schemas import (
    EvaluationResult,
    ExerciseDefinition,
    ExerciseType,
    PracticeResult,
)


FALLBACK_EXERCISES = {
    1: ExerciseDefinition(
        statement="1) Considere a função f(x) = 3x² - 5x + 2.\nCalcula f'(x).",
        exercise_type=ExerciseType.BASIC_PROCEDURAL,
    ),
    2: ExerciseDefinition(
        statement=(
            "2) Considere g(x) = (2x + 1) · e^{x²}.\n"
            "Usa regras do produto e da cadeia para calcular g'(x)."
        ),
        exercise_type=ExerciseType.MIXED_RULES,
    ),
    3: ExerciseDefinition(
        statement=(
            "3) Num exercício de exame, a função h modela o lucro diário:\n"
            "h(x) = (4x - 3) · e^{0.5x}, onde x é o número de unidades produzidas.\n"
            "Determina h'(x) e interpreta o seu significado."
        ),
        exercise_type=ExerciseType.APPLIED_WORD_PROBLEM,
    ),
}

FALLBACK_EVALUATIONS = {
    1: EvaluationResult(
        result=PracticeResult.CORRECT,
        score=100,
        feedback_summary="Bom trabalho! Acertaste este exercício.",
    ),
    2: EvaluationResult(
        result=PracticeResult.PARTIAL,
        score=60,
        feedback_summary="Quase lá. Vale a pena rever alguns passos deste tipo de exercício.",
    ),
    3: EvaluationResult(
        result=PracticeResult.INCORRECT,
        score=20,
        feedback_summary="A tua resolução ainda precisa de reforço neste tipo de exercício.",
    ),
}


def fallback_exercise(exercise_index: int) -> ExerciseDefinition:
    return FALLBACK_EXERCISES.get(exercise_index, FALLBACK_EXERCISES[3])


def fallback_evaluation(exercise_index: int) -> EvaluationResult:
    return FALLBACK_EVALUATIONS.get(exercise_index, FALLBACK_EVALUATIONS[3])
