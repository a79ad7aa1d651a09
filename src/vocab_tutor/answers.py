"""Answer checking and row stats bookkeeping after a session."""
import logging
import re
from dataclasses import dataclass, field

from vocab_tutor.models import Question, ScrambleQuestion, StudyMode
from vocab_tutor.scoring import now_ms

logger = logging.getLogger(__name__)

PUNCTUATION = re.compile(r"[.,/#!$%^&*;:{}=\-_`~()]")


@dataclass
class AnswerResult:
    row_id: str
    is_correct: bool
    timestamp: int = field(default_factory=now_ms)
    hint_used: bool = False


def normalize_answer(text: str) -> str:
    return PUNCTUATION.sub("", text.strip().lower())


def normalize_sentence(text: str) -> str:
    text = PUNCTUATION.sub("", text.lower())
    return re.sub(r"\s{2,}", " ", text).strip()


def check_answer(question: Question, user_input: str) -> bool:
    """True/False answers must match exactly; others ignore case and punctuation."""
    if question.type == StudyMode.TRUE_FALSE:
        return user_input == question.correct_answer
    return normalize_answer(user_input) == normalize_answer(question.correct_answer)


def check_scramble_answer(question: ScrambleQuestion, user_answer: str) -> bool:
    return normalize_sentence(user_answer) == normalize_sentence(question.original_sentence)


def apply_session_results(tables: list, results: list, quit_row_ids=None, now: int | None = None) -> int:
    """Fold session results into row stats. Returns the number of rows touched.

    Rows with results get their correct/incorrect counts bumped; rows left
    unanswered when a session was quit are flagged ``was_quit``. Either way
    ``last_studied`` moves to ``now``.
    """
    if now is None:
        now = now_ms()
    quit_row_ids = set(quit_row_ids or ())
    by_row = {}
    for result in results:
        by_row.setdefault(result.row_id, []).append(result)

    updated = 0
    for table in tables:
        for row in table.rows:
            row_results = by_row.get(row.id, [])
            was_quit = row.id in quit_row_ids
            if not row_results and not was_quit:
                continue
            correct = sum(1 for r in row_results if r.is_correct)
            row.stats.correct += correct
            row.stats.incorrect += len(row_results) - correct
            row.stats.last_studied = now
            row.stats.was_quit = was_quit
            updated += 1
    logger.debug("Applied %d results to %d rows", len(results), updated)
    return updated


def session_score(results: list) -> float:
    """Session score as percentage."""
    if not results:
        return 0.0
    correct = sum(1 for r in results if r.is_correct)
    return round((correct / len(results)) * 100, 1)
