"""Row selection: which words go into a study session."""
import functools
import logging
import random

from vocab_tutor.models import StudySettings, VocabRow
from vocab_tutor.scoring import now_ms, priority_score, success_rate

logger = logging.getLogger(__name__)


def tables_by_id(tables: list) -> dict:
    return {t.id: t for t in tables}


def collect_source_rows(tables: list, sources: list) -> list[VocabRow]:
    """Rows of every source table, deduplicated by id in first-seen order."""
    by_id = tables_by_id(tables)
    pool = {}
    for source in sources:
        table = by_id.get(source.table_id)
        if table is None:
            continue
        for row in table.rows:
            pool.setdefault(row.id, row)
    return list(pool.values())


def compose_balanced(tables: list, settings: StudySettings, pool: list, now: int) -> list[VocabRow]:
    """Round-robin the highest-priority rows of each source table."""
    source_table_ids = []
    for source in settings.sources:
        if source.table_id not in source_table_ids:
            source_table_ids.append(source.table_id)

    owner = {}
    for table in tables:
        for row in table.rows:
            owner.setdefault(row.id, table.id)

    rows_by_table = {}
    table_order = []
    for row in pool:
        table_id = owner.get(row.id)
        if table_id not in source_table_ids:
            continue
        if table_id not in rows_by_table:
            rows_by_table[table_id] = []
            table_order.append(table_id)
        rows_by_table[table_id].append(row)

    scores = {row.id: priority_score(row, now) for row in pool}
    for rows in rows_by_table.values():
        rows.sort(key=lambda r: scores[r.id], reverse=True)

    goal = settings.word_count or 0
    cursors = {table_id: 0 for table_id in table_order}
    composed = []
    while len(composed) < goal:
        added = False
        for table_id in table_order:
            if len(composed) >= goal:
                break
            cursor = cursors[table_id]
            rows = rows_by_table[table_id]
            if cursor < len(rows):
                composed.append(rows[cursor])
                cursors[table_id] = cursor + 1
                added = True
        # A full cycle with nothing added means every table is exhausted.
        if not added:
            break
    return composed


def _criteria_comparator(criteria_sorts: list, rng, now: int):
    def compare(a: VocabRow, b: VocabRow) -> float:
        for sort in criteria_sorts:
            result = 0
            if sort.field == "priorityScore":
                result = priority_score(b, now) - priority_score(a, now)
            elif sort.field == "successRate":
                result = success_rate(a) - success_rate(b)
            elif sort.field == "lastStudied":
                result = (a.stats.last_studied or 0) - (b.stats.last_studied or 0)
            elif sort.field == "random":
                result = rng.random() - 0.5
            if result != 0:
                return result
        return 0

    return compare


def sort_by_criteria(rows: list, criteria_sorts: list, rng=None, now: int | None = None) -> list[VocabRow]:
    """Multi-key sort; the first criterion that tells two rows apart wins.

    Each field has a fixed order regardless of the requested direction:
    priorityScore descending, successRate ascending, lastStudied ascending
    (never-studied rows count as 0 and sort first). ``random`` compares by a
    fresh coin per comparison.
    """
    rng = rng or random
    if now is None:
        now = now_ms()
    candidates = list(rows)
    if criteria_sorts:
        candidates.sort(key=functools.cmp_to_key(_criteria_comparator(criteria_sorts, rng, now)))
    return candidates


def select_rows(tables: list, settings: StudySettings, rng=None, now: int | None = None) -> list[VocabRow]:
    """Pick the rows to quiz according to the selection settings."""
    pool = collect_source_rows(tables, settings.sources)

    if settings.word_selection_mode == "manual":
        by_id = {row.id: row for row in pool}
        selected = [by_id[row_id] for row_id in settings.manual_word_ids or [] if row_id in by_id]
        logger.debug("Manual selection: %d of %d ids found", len(selected), len(settings.manual_word_ids or []))
        return selected

    if now is None:
        now = now_ms()
    if settings.type == "table":
        candidates = compose_balanced(tables, settings, pool, now)
    else:
        candidates = sort_by_criteria(pool, settings.criteria_sorts, rng=rng, now=now)
    selected = candidates[: settings.word_count] if settings.word_count is not None else candidates
    logger.debug("Selected %d rows from a pool of %d (%s)", len(selected), len(pool), settings.type)
    return selected
