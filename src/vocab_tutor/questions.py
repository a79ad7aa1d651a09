"""Question synthesis for a single row, relation and study mode."""
import logging
import random

from vocab_tutor.models import Question, Relation, StudyMode, Table, VocabRow

logger = logging.getLogger(__name__)

MAX_DISTRACTORS = 3


def shuffled(items: list, rng=None) -> list:
    """Return a shuffled copy of items (Fisher-Yates)."""
    rng = rng or random
    result = list(items)
    rng.shuffle(result)
    return result


def pick_mode(compatible_modes: list, randomize: bool, rng=None) -> StudyMode:
    if randomize:
        return (rng or random).choice(compatible_modes)
    return compatible_modes[0]


def compatible_modes_for(relation: Relation, accepted_modes: list) -> list:
    """Relation modes the caller accepts, in the relation's own order."""
    return [m for m in relation.compatible_modes or [] if m in accepted_modes]


def true_false_distractor(row: VocabRow, relation: Relation, all_rows: list, actual_answer: str) -> str:
    """Wrong answer proposed by a False true/false question.

    Always the first other row with a non-empty answer, so the same distractor
    tends to recur across questions.
    """
    for other in all_rows:
        if other.id == row.id:
            continue
        answer = other.joined(relation.answer_column_ids)
        if answer:
            return answer
    return f"Not {actual_answer}"


def multiple_choice_options(row: VocabRow, relation: Relation, all_rows: list, actual_answer: str, rng=None) -> list:
    """Up to three distinct wrong answers plus the correct one, unshuffled."""
    distractors = []
    for other in all_rows:
        if other.id == row.id:
            continue
        answer = other.joined(relation.answer_column_ids)
        if answer and answer != actual_answer and answer not in distractors:
            distractors.append(answer)
    options = shuffled(distractors, rng)[:MAX_DISTRACTORS]
    options.append(actual_answer)
    return options


def create_question(
    row: VocabRow,
    relation: Relation,
    table: Table,
    all_rows: list,
    mode: StudyMode,
    rng=None,
) -> Question | None:
    """Build one question, or None when the row cannot support it.

    True/False and Multiple Choice fall back to Typing when no usable
    distractor exists. Modes other than the quiz modes yield None.

    Args:
        row: Row being asked about.
        relation: Relation deciding which columns form question and answer.
        table: Table owning the row, used to resolve column names.
        all_rows: Rows eligible as distractor sources.
        mode: Requested study mode.
        rng: Random source with the ``random.Random`` interface.
    """
    rng = rng or random
    question_text = row.joined(relation.question_column_ids)
    actual_answer = row.joined(relation.answer_column_ids)

    if not question_text or (not actual_answer and mode != StudyMode.SCRAMBLED):
        return None

    def build(question_type: StudyMode, correct_answer: str, **extra) -> Question:
        return Question(
            row_id=row.id,
            table_id=table.id,
            relation_id=relation.id,
            question_source_column_names=[table.column_name(cid) for cid in relation.question_column_ids],
            question_text=question_text,
            correct_answer=correct_answer,
            type=question_type,
            **extra,
        )

    if mode == StudyMode.TYPING:
        return build(mode, actual_answer)

    if mode == StudyMode.SCRAMBLED:
        return build(mode, question_text)

    if mode == StudyMode.TRUE_FALSE:
        if rng.random() > 0.5:
            return build(mode, "True", proposed_answer=actual_answer)
        distractor = true_false_distractor(row, relation, all_rows, actual_answer)
        if not distractor or distractor == actual_answer:
            logger.debug("No true/false distractor for row %s, falling back to typing", row.id)
            return build(StudyMode.TYPING, actual_answer)
        return build(mode, "False", proposed_answer=distractor)

    if mode == StudyMode.MULTIPLE_CHOICE:
        options = multiple_choice_options(row, relation, all_rows, actual_answer, rng)
        if len(options) < 2:
            logger.debug("No multiple choice distractors for row %s, falling back to typing", row.id)
            return build(StudyMode.TYPING, actual_answer)
        return build(mode, actual_answer, options=shuffled(options, rng))

    return None
