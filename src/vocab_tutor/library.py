"""Loading and saving vocabulary tables from JSON or YAML files."""
import json
import logging
from pathlib import Path

from vocab_tutor.models import Column, Relation, RowStats, StudyMode, Table, VocabRow

logger = logging.getLogger(__name__)

DEFAULT_LIBRARY_PATH = str(Path.home() / ".vocab_tutor" / "library.json")


class LibraryFormatError(ValueError):
    """A library or settings file does not have the expected shape."""


def read_library_file(file_path: str) -> dict | list:
    path = Path(file_path)
    suffix = path.suffix.lower()

    if suffix in (".yaml", ".yml"):
        import yaml
        try:
            return yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise LibraryFormatError(f"{path.name}: invalid YAML ({e})") from e
    # .json and anything else
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise LibraryFormatError(f"{path.name}: invalid JSON ({e})") from e


def pick(data: dict, camel: str, snake: str, default=None):
    """Value under the camelCase key, else the snake_case key, else default."""
    if camel in data:
        return data[camel]
    return data.get(snake, default)


def require_id(data: dict, what: str) -> str:
    if not isinstance(data, dict) or data.get("id") in (None, ""):
        raise LibraryFormatError(f"{what} is missing an id")
    return str(data["id"])


def parse_mode(value) -> StudyMode:
    try:
        return StudyMode(value)
    except ValueError:
        # Accept enum names too, e.g. "MULTIPLE_CHOICE" or "multiple_choice".
        try:
            return StudyMode[str(value).upper()]
        except KeyError:
            raise LibraryFormatError(f"unknown study mode: {value!r}") from None


def parse_timestamp(value, row_id: str):
    """Epoch milliseconds as an int; numeric strings are accepted."""
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise LibraryFormatError(f"row {row_id}: invalid lastStudied {value!r}") from None


def row_from_dict(data: dict) -> VocabRow:
    row_id = require_id(data, "row")
    stats = data.get("stats") or {}
    return VocabRow(
        id=row_id,
        cols={str(k): "" if v is None else str(v) for k, v in (data.get("cols") or {}).items()},
        stats=RowStats(
            correct=int(stats.get("correct", 0)),
            incorrect=int(stats.get("incorrect", 0)),
            last_studied=parse_timestamp(pick(stats, "lastStudied", "last_studied"), row_id),
            was_quit=bool(pick(stats, "wasQuit", "was_quit", False)),
        ),
    )


def relation_from_dict(data: dict) -> Relation:
    relation_id = require_id(data, "relation")
    return Relation(
        id=relation_id,
        name=data.get("name", ""),
        question_column_ids=list(pick(data, "questionColumnIds", "question_column_ids", [])),
        answer_column_ids=list(pick(data, "answerColumnIds", "answer_column_ids", [])),
        compatible_modes=[parse_mode(m) for m in pick(data, "compatibleModes", "compatible_modes", None) or []],
    )


def table_from_dict(data: dict) -> Table:
    table_id = require_id(data, "table")
    return Table(
        id=table_id,
        name=data.get("name", ""),
        columns=[Column(id=require_id(c, "column"), name=c.get("name", "")) for c in data.get("columns", [])],
        rows=[row_from_dict(r) for r in data.get("rows", [])],
        relations=[relation_from_dict(r) for r in data.get("relations", [])],
    )


def tables_from_dict(data) -> list[Table]:
    """Parse ``{"tables": [...]}`` or a bare list of tables."""
    if isinstance(data, dict):
        data = data.get("tables")
    if not isinstance(data, list):
        raise LibraryFormatError("expected a list of tables")
    return [table_from_dict(t) for t in data]


def table_to_dict(table: Table) -> dict:
    return {
        "id": table.id,
        "name": table.name,
        "columns": [{"id": c.id, "name": c.name} for c in table.columns],
        "rows": [
            {
                "id": r.id,
                "cols": dict(r.cols),
                "stats": {
                    "correct": r.stats.correct,
                    "incorrect": r.stats.incorrect,
                    "lastStudied": r.stats.last_studied,
                    "wasQuit": r.stats.was_quit,
                },
            }
            for r in table.rows
        ],
        "relations": [
            {
                "id": rel.id,
                "name": rel.name,
                "questionColumnIds": list(rel.question_column_ids),
                "answerColumnIds": list(rel.answer_column_ids),
                "compatibleModes": [StudyMode(m).value for m in rel.compatible_modes],
            }
            for rel in table.relations
        ],
    }


def load_tables(file_path: str = DEFAULT_LIBRARY_PATH) -> list[Table]:
    tables = tables_from_dict(read_library_file(file_path))
    logger.info("Loaded %d tables from %s", len(tables), file_path)
    return tables


def save_tables(file_path: str, tables: list) -> None:
    """Write tables as JSON, creating the parent directory if needed."""
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps({"tables": [table_to_dict(t) for t in tables]}, indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    logger.info("Saved %d tables to %s", len(tables), file_path)
