import time
import pytest

from vocab_tutor.library import save_tables
from vocab_tutor.models import Column, Relation, RowStats, StudyMode, Table, VocabRow

DAY_MS = 1000 * 3600 * 24


def make_table(table_id: str = "t1", size: int = 10, now: int | None = None) -> Table:
    """Ten rows r0..r9; r0 was studied longest ago, r9 most recently."""
    now = now if now is not None else int(time.time() * 1000)
    return Table(
        id=table_id,
        name="Test Table",
        columns=[Column("c1", "Word"), Column("c2", "Definition"), Column("c3", "Sentence")],
        rows=[
            VocabRow(
                id=f"r{i}" if table_id == "t1" else f"{table_id}-r{i}",
                cols={"c1": f"Word {i}", "c2": f"Definition {i}", "c3": f"Sentence containing word {i}."},
                stats=RowStats(correct=i, incorrect=10 - i, last_studied=now - (10 - i) * DAY_MS),
            )
            for i in range(size)
        ],
        relations=[
            Relation("rel1", "Word -> Def", ["c1"], ["c2"], [StudyMode.MULTIPLE_CHOICE, StudyMode.TYPING]),
            Relation("rel2", "Def -> Word", ["c2"], ["c1"], [StudyMode.MULTIPLE_CHOICE, StudyMode.TYPING]),
            Relation("rel3", "Sentence Scramble", ["c3"], [], [StudyMode.SCRAMBLED]),
        ],
    )


@pytest.fixture
def vocab_table():
    return make_table()


@pytest.fixture
def tables(vocab_table):
    return [vocab_table]


@pytest.fixture
def tmp_library(tmp_path, tables):
    """Provide a temporary library file holding the test tables."""
    path = str(tmp_path / "library.json")
    save_tables(path, tables)
    return path


@pytest.fixture
def table_factory():
    return make_table
