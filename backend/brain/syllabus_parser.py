"""Syllabus Parser: extracts ordered topics from raw syllabus text."""
from __future__ import annotations

import logging
import re
from typing import Callable, Optional

from brain.schemas import Difficulty, Topic

logger = logging.getLogger(__name__)

# "Unit 1: Title", "chapter 2 Title", "MODULE 3 - Title" ...
HEADER_RE = re.compile(r"^(Unit|Chapter|Module)\s+\d+[:\s]+(.+)", re.IGNORECASE)
NOISE_RE = re.compile(r"^(Page|Copyright)", re.IGNORECASE)

MIN_SUBTOPIC_CHARS = 6
FALLBACK_NAME = "Extracted Content"
FALLBACK_LINES = 20
DEFAULT_SUBJECT = "General"

HARD_KEYWORDS = ("algorithm", "optimization", "calculus", "advanced", "architecture")
EASY_KEYWORDS = ("introduction", "overview", "basics", "definition", "history")

# (rule name, predicate(subtopics, lowered text), result)
# Listed highest precedence first; the first rule that matches decides.
DifficultyRule = tuple[str, Callable[[list[str], str], bool], Difficulty]

DIFFICULTY_RULES: list[DifficultyRule] = [
    ("hard_keyword", lambda subs, text: any(k in text for k in HARD_KEYWORDS), Difficulty.HARD),
    ("easy_keyword", lambda subs, text: any(k in text for k in EASY_KEYWORDS), Difficulty.EASY),
    ("few_subtopics", lambda subs, text: len(subs) < 2, Difficulty.EASY),
    ("many_subtopics", lambda subs, text: len(subs) > 5, Difficulty.HARD),
]


def matching_rule(name: str, subtopics: list[str]) -> Optional[DifficultyRule]:
    text = " ".join([name, *subtopics]).lower()
    for rule in DIFFICULTY_RULES:
        if rule[1](subtopics, text):
            return rule
    return None


def infer_difficulty(name: str, subtopics: list[str]) -> Difficulty:
    """Keyword rules beat subtopic-count rules; Medium when nothing matches."""
    rule = matching_rule(name, subtopics)
    return rule[2] if rule else Difficulty.MEDIUM


def _is_subtopic(line: str) -> bool:
    return len(line) >= MIN_SUBTOPIC_CHARS and not NOISE_RE.match(line)


def parse_syllabus_text(raw_text: str) -> list[Topic]:
    lines = [line.strip() for line in raw_text.splitlines()]
    lines = [line for line in lines if line]

    sections: list[tuple[str, list[str]]] = []
    for line in lines:
        match = HEADER_RE.match(line)
        if match:
            sections.append((match.group(2).strip(), []))
        elif sections and _is_subtopic(line):
            sections[-1][1].append(line)

    if not sections:
        logger.info("No unit headers found; falling back to a single topic")
        return [Topic(
            subject=DEFAULT_SUBJECT,
            name=FALLBACK_NAME,
            subtopics=lines[:FALLBACK_LINES],
            difficulty=Difficulty.MEDIUM,
            order=1,
        )]

    topics = [
        Topic(
            subject=DEFAULT_SUBJECT,
            name=name,
            subtopics=subtopics,
            difficulty=infer_difficulty(name, subtopics),
            order=order,
        )
        for order, (name, subtopics) in enumerate(sections, start=1)
    ]
    logger.info("Extracted %d topics from %d lines", len(topics), len(lines))
    return topics
