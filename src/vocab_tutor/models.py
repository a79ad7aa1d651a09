"""Data classes for the vocabulary domain model."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class StudyMode(str, Enum):
    FLASHCARDS = "Flashcards"
    MULTIPLE_CHOICE = "Multiple Choice"
    TYPING = "Typing"
    TRUE_FALSE = "True/False"
    SCRAMBLED = "Scrambled"


# Modes the session generator can synthesize questions for.
QUIZ_MODES = (
    StudyMode.MULTIPLE_CHOICE,
    StudyMode.TYPING,
    StudyMode.TRUE_FALSE,
    StudyMode.SCRAMBLED,
)

SORT_FIELDS = ("priorityScore", "successRate", "lastStudied", "random")


@dataclass
class Column:
    id: str
    name: str


@dataclass
class RowStats:
    correct: int = 0
    incorrect: int = 0
    last_studied: Optional[int] = None  # epoch ms
    was_quit: bool = False

    @property
    def encounters(self) -> int:
        return self.correct + self.incorrect


@dataclass
class VocabRow:
    id: str
    cols: dict = field(default_factory=dict)
    stats: RowStats = field(default_factory=RowStats)

    def joined(self, column_ids: list) -> str:
        """Values of the given columns, empty ones dropped, joined by ' / '."""
        return " / ".join(v for v in (self.cols.get(cid) for cid in column_ids) if v)


@dataclass
class Relation:
    id: str
    name: str
    question_column_ids: list = field(default_factory=list)
    answer_column_ids: list = field(default_factory=list)
    compatible_modes: list = field(default_factory=list)


@dataclass
class Table:
    id: str
    name: str = ""
    columns: list = field(default_factory=list)
    rows: list = field(default_factory=list)
    relations: list = field(default_factory=list)

    def column_name(self, column_id: str) -> str:
        return next((c.name for c in self.columns if c.id == column_id), "")

    def find_row(self, row_id: str) -> Optional[VocabRow]:
        return next((r for r in self.rows if r.id == row_id), None)

    def find_relation(self, relation_id: str) -> Optional[Relation]:
        return next((r for r in self.relations if r.id == relation_id), None)

    def has_row(self, row_id: str) -> bool:
        return any(r.id == row_id for r in self.rows)


@dataclass
class StudySource:
    table_id: str
    relation_id: str


@dataclass
class CriteriaSort:
    field: str
    direction: str = "asc"


@dataclass
class StudySettings:
    sources: list
    modes: list
    type: str = "table"  # "table" or "criteria"
    randomize_modes: bool = False
    word_selection_mode: str = "auto"  # "auto" or "manual"
    word_count: Optional[int] = None
    manual_word_ids: list = field(default_factory=list)
    criteria_sorts: list = field(default_factory=list)


@dataclass
class Question:
    row_id: str
    table_id: str
    relation_id: str
    question_source_column_names: list
    question_text: str
    correct_answer: str
    type: StudyMode
    proposed_answer: Optional[str] = None  # True/False only
    options: Optional[list] = None  # Multiple Choice only


@dataclass
class ScrambleSessionSettings:
    sources: list
    split_count: int = 4
    interaction_mode: str = "click"  # "click" or "typing"


@dataclass
class ScrambleQuestion:
    row_id: str
    table_id: str
    relation_id: str
    original_sentence: str
    scrambled_parts: list
