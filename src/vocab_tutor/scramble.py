"""Sentence scramble sessions."""
import logging
import re

from vocab_tutor.models import ScrambleQuestion, ScrambleSessionSettings
from vocab_tutor.questions import shuffled
from vocab_tutor.selection import collect_source_rows, tables_by_id

logger = logging.getLogger(__name__)

# Word separators. Unlike str.split and re "\s", this leaves out the
# \x1c-\x1f separators and \x85, and includes the BOM.
WHITESPACE = re.compile(r"[\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]+")


def split_words(sentence: str) -> list[str]:
    return [w for w in WHITESPACE.split(sentence) if w]


def generate_scramble_session(tables: list, settings: ScrambleSessionSettings, rng=None) -> list[ScrambleQuestion]:
    """One scramble question per row with at least split_count words.

    Each row uses the first source whose table contains it and whose sentence
    is long enough; later sources are not tried once a question is emitted.
    """
    by_id = tables_by_id(tables)
    questions = []
    for row in collect_source_rows(tables, settings.sources):
        for source in settings.sources:
            table = by_id.get(source.table_id)
            relation = table.find_relation(source.relation_id) if table else None
            if relation is None or not table.has_row(row.id):
                continue

            sentence = row.joined(relation.question_column_ids)
            words = split_words(sentence)
            if len(words) >= settings.split_count:
                questions.append(ScrambleQuestion(
                    row_id=row.id,
                    table_id=table.id,
                    relation_id=relation.id,
                    original_sentence=sentence,
                    scrambled_parts=shuffled(words, rng),
                ))
                break

    logger.debug("Generated %d scramble questions", len(questions))
    return shuffled(questions, rng)
