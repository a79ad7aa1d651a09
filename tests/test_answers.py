# tests/test_answers.py
from vocab_tutor.answers import (
    AnswerResult, apply_session_results, check_answer, check_scramble_answer,
    normalize_answer, normalize_sentence, session_score,
)
from vocab_tutor.models import Question, ScrambleQuestion, StudyMode


def question(mode=StudyMode.TYPING, correct="Definition 1"):
    return Question(
        row_id="r1", table_id="t1", relation_id="rel1",
        question_source_column_names=["Word"], question_text="Word 1",
        correct_answer=correct, type=mode,
    )


def test_normalize_answer():
    assert normalize_answer("  Hello, World!  ") == "hello world"
    assert normalize_answer("well-known (adj.)") == "wellknown adj"


def test_check_answer_ignores_case_and_punctuation():
    assert check_answer(question(), "definition 1") is True
    assert check_answer(question(), "  DEFINITION 1. ") is True
    assert check_answer(question(), "Definition 2") is False


def test_check_answer_true_false_is_exact():
    q = question(StudyMode.TRUE_FALSE, correct="True")
    assert check_answer(q, "True") is True
    assert check_answer(q, "true") is False
    assert check_answer(q, "False") is False


def test_normalize_sentence_collapses_spaces():
    assert normalize_sentence("The  cat,   sat. ") == "the cat sat"


def test_check_scramble_answer():
    q = ScrambleQuestion("r1", "t1", "rel3", "Sentence containing word 1.", ["word", "1.", "Sentence", "containing"])
    assert check_scramble_answer(q, "sentence containing word 1") is True
    assert check_scramble_answer(q, "containing sentence word 1.") is False


def test_apply_session_results(vocab_table):
    r1, r2 = vocab_table.find_row("r1"), vocab_table.find_row("r2")
    results = [
        AnswerResult("r1", True, timestamp=1),
        AnswerResult("r1", False, timestamp=2),
        AnswerResult("r2", True, timestamp=3),
    ]
    updated = apply_session_results([vocab_table], results, now=5000)
    assert updated == 2
    assert (r1.stats.correct, r1.stats.incorrect, r1.stats.last_studied) == (2, 10, 5000)
    assert (r2.stats.correct, r2.stats.incorrect) == (3, 8)
    assert vocab_table.find_row("r3").stats.last_studied != 5000


def test_apply_session_results_marks_quit_rows(vocab_table):
    updated = apply_session_results([vocab_table], [AnswerResult("r1", True)], quit_row_ids={"r4"}, now=42)
    assert updated == 2
    r4 = vocab_table.find_row("r4")
    assert r4.stats.was_quit is True
    assert r4.stats.last_studied == 42
    assert (r4.stats.correct, r4.stats.incorrect) == (4, 6)
    assert vocab_table.find_row("r1").stats.was_quit is False


def test_apply_session_results_nothing_to_do(vocab_table):
    assert apply_session_results([vocab_table], []) == 0


def test_session_score():
    results = [AnswerResult("a", True), AnswerResult("b", True), AnswerResult("c", False)]
    assert session_score(results) == 66.7
    assert session_score([]) == 0.0
