"""Priority and success-rate scoring for vocabulary rows."""
import math
import time

from vocab_tutor.models import VocabRow

UNSEEN_SCORE = 1000
NEVER_STUDIED_DAYS = 999
MS_PER_DAY = 1000 * 3600 * 24


def now_ms() -> int:
    return int(time.time() * 1000)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def priority_score(row: VocabRow, now: int | None = None) -> int:
    """How urgently a row needs review. Higher means more urgent.

    Unseen rows always score UNSEEN_SCORE. Otherwise the score grows with the
    failure ratio and with the days since the row was last studied (the
    recency bonus is capped at 50).

    Args:
        row: Row whose stats are scored.
        now: Current time in epoch ms (defaults to the wall clock).
    """
    stats = row.stats
    encounters = stats.encounters
    if encounters == 0:
        return UNSEEN_SCORE

    if now is None:
        now = now_ms()
    days_since = (now - stats.last_studied) / MS_PER_DAY if stats.last_studied else NEVER_STUDIED_DAYS
    if days_since > -1:
        recency_bonus = min(math.log(days_since + 1) * 10, 50)
    else:
        # A day or more in the future: the log is undefined.
        recency_bonus = 0

    failure_penalty = (stats.incorrect + 1) / (stats.correct + 1)
    success_ratio = stats.correct / encounters

    return round_half_up(failure_penalty * 50 + (1 - success_ratio) * 30 + recency_bonus)


def success_rate(row: VocabRow) -> int:
    """Percentage of correct answers, 0 for unseen rows."""
    encounters = row.stats.encounters
    if encounters == 0:
        return 0
    return round_half_up(row.stats.correct / encounters * 100)
