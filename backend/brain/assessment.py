"""Familiarity quiz scoring and pace classification."""

import logging
from pydantic import BaseModel, Field
from typing import Optional, Sequence

from brain.schemas import Pace

logger = logging.getLogger(__name__)

SLOW_BELOW = 40.0
FAST_ABOVE = 70.0


class QuizQuestion(BaseModel):
    topic: str
    question: str
    options: list[str] = Field(min_length=4, max_length=4)
    correct_answer: int = Field(ge=0, le=3)


class AssessmentResult(BaseModel):
    score: float
    pace: Pace


def score_answers(questions: Sequence[QuizQuestion], answers: Sequence[Optional[int]]) -> float:
    """Percentage of questions answered with the correct option index.

    Unanswered questions (missing or None) count as wrong.
    """
    if not questions:
        raise ValueError("Quiz has no questions")
    correct = sum(
        1 for idx, q in enumerate(questions)
        if idx < len(answers) and answers[idx] == q.correct_answer
    )
    return correct / len(questions) * 100


def classify_pace(score: float) -> Pace:
    if score < SLOW_BELOW:
        return Pace.SLOW
    if score > FAST_ABOVE:
        return Pace.FAST
    return Pace.MEDIUM


def assess(questions: Sequence[QuizQuestion], answers: Sequence[Optional[int]]) -> AssessmentResult:
    score = score_answers(questions, answers)
    pace = classify_pace(score)
    logger.info("Quiz scored %.1f%% -> %s pace", score, pace.value)
    return AssessmentResult(score=score, pace=pace)
