# tests/test_scoring.py
import math

from vocab_tutor.models import RowStats, VocabRow
from vocab_tutor.scoring import MS_PER_DAY, priority_score, round_half_up, success_rate

NOW = 1_700_000_000_000


def row(correct=0, incorrect=0, last_studied=None):
    return VocabRow(id="r", stats=RowStats(correct=correct, incorrect=incorrect, last_studied=last_studied))


def test_unseen_row_scores_1000():
    """Rows never answered always get top priority."""
    assert priority_score(row(), now=NOW) == 1000
    assert priority_score(row(last_studied=NOW), now=NOW) == 1000


def test_priority_score_formula():
    r = row(correct=1, incorrect=3, last_studied=NOW - 2 * MS_PER_DAY)
    expected = round_half_up(
        (3 + 1) / (1 + 1) * 50 + (1 - 1 / 4) * 30 + min(math.log(2 + 1) * 10, 50)
    )
    assert priority_score(r, now=NOW) == expected


def test_priority_score_studied_just_now():
    """No recency bonus when studied this instant."""
    r = row(correct=1, incorrect=1, last_studied=NOW)
    # penalty 1 * 50 + 0.5 * 30 + 0
    assert priority_score(r, now=NOW) == 65


def test_priority_score_never_studied_timestamp():
    """Seen rows without a timestamp count as 999 days old; bonus is capped at 50."""
    r = row(correct=2, incorrect=0)
    # (0+1)/(2+1)*50 = 16.67, success 1.0 -> 0, bonus min(log(1000)*10, 50) = 50
    assert priority_score(r, now=NOW) == 67


def test_recency_bonus_capped():
    old = row(correct=1, incorrect=1, last_studied=NOW - 10_000 * MS_PER_DAY)
    older = row(correct=1, incorrect=1, last_studied=NOW - 100_000 * MS_PER_DAY)
    assert priority_score(old, now=NOW) == priority_score(older, now=NOW) == 115


def test_failures_raise_priority():
    weak = row(correct=1, incorrect=5, last_studied=NOW - MS_PER_DAY)
    strong = row(correct=5, incorrect=1, last_studied=NOW - MS_PER_DAY)
    assert priority_score(weak, now=NOW) > priority_score(strong, now=NOW)


def test_future_timestamp_does_not_fail():
    r = row(correct=1, incorrect=1, last_studied=NOW + 5 * MS_PER_DAY)
    assert priority_score(r, now=NOW) == 65


def test_near_future_timestamp_lowers_priority():
    """Half a day ahead gives a negative recency bonus."""
    r = row(correct=1, incorrect=1, last_studied=NOW + MS_PER_DAY // 2)
    # 50 + 15 + log(0.5) * 10
    assert priority_score(r, now=NOW) == 58


def test_priority_score_is_pure():
    r = row(correct=3, incorrect=4, last_studied=NOW - 3 * MS_PER_DAY)
    assert priority_score(r, now=NOW) == priority_score(r, now=NOW)


def test_priority_score_defaults_to_wall_clock():
    r = row(correct=1, incorrect=1)
    assert isinstance(priority_score(r), int)


def test_success_rate():
    assert success_rate(row(correct=3, incorrect=1)) == 75
    assert success_rate(row(correct=1, incorrect=2)) == 33
    assert success_rate(row(correct=2, incorrect=1)) == 67


def test_success_rate_unseen_is_zero():
    assert success_rate(row()) == 0


def test_success_rate_rounds_half_up():
    """0.5 rounds away from zero like a calculator, not to even."""
    assert success_rate(row(correct=1, incorrect=7)) == 13  # 12.5
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
