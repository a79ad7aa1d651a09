"""Tests for data model classes."""
from vocab_tutor.models import (
    Column, Relation, RowStats, ScrambleSessionSettings, StudyMode, StudySettings, Table, VocabRow,
)


def test_row_stats_defaults():
    s = RowStats()
    assert s.correct == 0
    assert s.incorrect == 0
    assert s.last_studied is None
    assert s.was_quit is False
    assert s.encounters == 0


def test_row_stats_encounters():
    assert RowStats(correct=3, incorrect=2).encounters == 5


def test_row_joined_drops_empty_values():
    row = VocabRow(id="r1", cols={"a": "cat", "b": "", "c": "feline"})
    assert row.joined(["a", "b", "c"]) == "cat / feline"


def test_row_joined_missing_columns():
    """Unknown column ids count as empty."""
    row = VocabRow(id="r1", cols={"a": "cat"})
    assert row.joined(["x", "a", "y"]) == "cat"
    assert row.joined(["x"]) == ""


def test_row_joined_keeps_column_order():
    row = VocabRow(id="r1", cols={"a": "1", "b": "2"})
    assert row.joined(["b", "a"]) == "2 / 1"


def test_table_lookups(vocab_table):
    assert vocab_table.column_name("c2") == "Definition"
    assert vocab_table.column_name("nope") == ""
    assert vocab_table.find_row("r3").cols["c1"] == "Word 3"
    assert vocab_table.find_row("nope") is None
    assert vocab_table.find_relation("rel2").name == "Def -> Word"
    assert vocab_table.find_relation("nope") is None
    assert vocab_table.has_row("r9")
    assert not vocab_table.has_row("r10")


def test_duplicate_column_names_allowed():
    t = Table(id="t", columns=[Column("a", "Word"), Column("b", "Word")])
    assert t.column_name("a") == t.column_name("b") == "Word"


def test_study_mode_values():
    assert StudyMode.MULTIPLE_CHOICE.value == "Multiple Choice"
    assert StudyMode.TRUE_FALSE.value == "True/False"
    assert StudyMode("Typing") is StudyMode.TYPING
    assert StudyMode.SCRAMBLED == "Scrambled"


def test_study_settings_defaults():
    s = StudySettings(sources=[], modes=[StudyMode.TYPING])
    assert s.type == "table"
    assert s.randomize_modes is False
    assert s.word_selection_mode == "auto"
    assert s.word_count is None
    assert s.manual_word_ids == []
    assert s.criteria_sorts == []


def test_scramble_settings_defaults():
    s = ScrambleSessionSettings(sources=[])
    assert s.split_count == 4
    assert s.interaction_mode == "click"


def test_relation_defaults():
    r = Relation(id="rel", name="Empty")
    assert r.compatible_modes == []
    assert r.question_column_ids == []
