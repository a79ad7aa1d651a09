"""Study and scramble settings: parsing from files and sensible defaults."""
from vocab_tutor.library import LibraryFormatError, parse_mode, pick, read_library_file
from vocab_tutor.models import (
    QUIZ_MODES, SORT_FIELDS, CriteriaSort, ScrambleSessionSettings, StudyMode,
    StudySettings, StudySource,
)

SESSION_TYPES = ("table", "criteria")
WORD_SELECTION_MODES = ("auto", "manual")
INTERACTION_MODES = ("click", "typing")
DEFAULT_WORD_COUNT = 10
DEFAULT_SPLIT_COUNT = 4


def _choice(value, allowed: tuple, what: str) -> str:
    if value not in allowed:
        raise LibraryFormatError(f"{what} must be one of {', '.join(allowed)}, got {value!r}")
    return value


def sources_from_list(items: list) -> list[StudySource]:
    sources = []
    for item in items or []:
        table_id = pick(item, "tableId", "table_id")
        relation_id = pick(item, "relationId", "relation_id")
        if table_id is None or relation_id is None:
            raise LibraryFormatError(f"source needs a table and a relation id: {item!r}")
        sources.append(StudySource(table_id=str(table_id), relation_id=str(relation_id)))
    return sources


def study_settings_from_dict(data: dict) -> StudySettings:
    sorts = []
    for item in pick(data, "criteriaSorts", "criteria_sorts", None) or []:
        sorts.append(CriteriaSort(
            field=_choice(item.get("field"), SORT_FIELDS, "sort field"),
            direction=_choice(item.get("direction", "asc"), ("asc", "desc"), "sort direction"),
        ))
    word_count = pick(data, "wordCount", "word_count")
    return StudySettings(
        type=_choice(data.get("type", "table"), SESSION_TYPES, "session type"),
        sources=sources_from_list(data.get("sources")),
        modes=[parse_mode(m) for m in data.get("modes", [])],
        randomize_modes=bool(pick(data, "randomizeModes", "randomize_modes", False)),
        word_selection_mode=_choice(
            pick(data, "wordSelectionMode", "word_selection_mode", "auto"),
            WORD_SELECTION_MODES, "word selection mode",
        ),
        word_count=int(word_count) if word_count is not None else None,
        manual_word_ids=[str(i) for i in pick(data, "manualWordIds", "manual_word_ids", None) or []],
        criteria_sorts=sorts,
    )


def scramble_settings_from_dict(data: dict) -> ScrambleSessionSettings:
    return ScrambleSessionSettings(
        sources=sources_from_list(data.get("sources")),
        split_count=int(pick(data, "splitCount", "split_count", DEFAULT_SPLIT_COUNT)),
        interaction_mode=_choice(
            pick(data, "interactionMode", "interaction_mode", "click"),
            INTERACTION_MODES, "interaction mode",
        ),
    )


def default_study_settings(tables: list, word_count: int = DEFAULT_WORD_COUNT) -> StudySettings:
    """Quiz every table through its first relation, all modes, randomized."""
    sources = [
        StudySource(table_id=t.id, relation_id=t.relations[0].id)
        for t in tables if t.relations
    ]
    return StudySettings(
        type="table",
        sources=sources,
        modes=list(QUIZ_MODES),
        randomize_modes=True,
        word_selection_mode="auto",
        word_count=word_count,
    )


def default_scramble_settings(tables: list, split_count: int = DEFAULT_SPLIT_COUNT) -> ScrambleSessionSettings:
    """Use each table's first relation that supports scrambling."""
    sources = []
    for table in tables:
        relation = next(
            (r for r in table.relations if StudyMode.SCRAMBLED in r.compatible_modes),
            None,
        )
        if relation is not None:
            sources.append(StudySource(table_id=table.id, relation_id=relation.id))
    return ScrambleSessionSettings(sources=sources, split_count=split_count)


def load_settings(file_path: str) -> dict:
    """Read a settings file with optional ``study`` and ``scramble`` sections.

    Returns a dict with the parsed sections under the same keys.
    """
    data = read_library_file(file_path)
    if not isinstance(data, dict):
        raise LibraryFormatError("settings file must contain a mapping")
    settings = {}
    if data.get("study") is not None:
        settings["study"] = study_settings_from_dict(data["study"])
    if data.get("scramble") is not None:
        settings["scramble"] = scramble_settings_from_dict(data["scramble"])
    return settings
