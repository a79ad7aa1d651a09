"""Study session generation and per-question regeneration."""
import logging

from vocab_tutor.models import Question, StudySettings
from vocab_tutor.questions import compatible_modes_for, create_question, pick_mode, shuffled
from vocab_tutor.selection import collect_source_rows, select_rows, tables_by_id

logger = logging.getLogger(__name__)


def generate_study_session(tables: list, settings: StudySettings, rng=None, now: int | None = None) -> list[Question]:
    """Select rows and synthesize one question per row, in random order.

    A row is quizzed through the first source whose table contains it. Rows
    with no resolvable relation, no accepted mode, or no usable text are
    skipped.
    """
    by_id = tables_by_id(tables)
    all_rows = collect_source_rows(tables, settings.sources)
    selected = select_rows(tables, settings, rng=rng, now=now)

    questions = []
    for row in selected:
        source = next(
            (s for s in settings.sources if s.table_id in by_id and by_id[s.table_id].has_row(row.id)),
            None,
        )
        if source is None:
            logger.debug("Row %s is in no source table, skipping", row.id)
            continue
        table = by_id[source.table_id]
        relation = table.find_relation(source.relation_id)
        if relation is None:
            logger.debug("Relation %s not found in table %s, skipping", source.relation_id, table.id)
            continue

        modes = compatible_modes_for(relation, settings.modes)
        if not modes:
            continue
        mode = pick_mode(modes, settings.randomize_modes, rng)

        question = create_question(row, relation, table, all_rows, mode, rng=rng)
        if question is not None:
            questions.append(question)

    logger.debug("Generated %d questions from %d selected rows", len(questions), len(selected))
    return shuffled(questions, rng)


def regenerate_question_for_row(
    question: Question,
    all_rows_from_sources: list,
    tables: list,
    settings: StudySettings,
    rng=None,
) -> Question:
    """Re-synthesize a question for the same row, possibly in another mode.

    Table, row and relation come from the question itself. When anything
    fails to resolve or synthesize, the original question is returned.
    """
    table = tables_by_id(tables).get(question.table_id)
    if table is None:
        return question
    row = table.find_row(question.row_id)
    if row is None:
        return question
    relation = table.find_relation(question.relation_id)
    if relation is None:
        return question

    modes = compatible_modes_for(relation, settings.modes)
    if not modes:
        return question
    mode = pick_mode(modes, settings.randomize_modes, rng)

    regenerated = create_question(row, relation, table, all_rows_from_sources, mode, rng=rng)
    return regenerated or question
