from todos.domain.enums import TaskStatus
from todos.domain.errors import InvalidStatusError

# Glify, którymi użytkownicy "dekorują" statusy (np. "✅ Completed").
STATUS_DECORATIONS = frozenset({"✅", "✓", "🟢", "🔄", "🚧", "🟡", "⏳", "❌", "🚫", "🔴", "⛔"})

_SYNONYMS: dict[str, TaskStatus] = {
    "in progress": TaskStatus.IN_PROGRESS,
    "complete": TaskStatus.COMPLETED,
    "completed": TaskStatus.COMPLETED,
    "done": TaskStatus.COMPLETED,
    "not started": TaskStatus.NOT_STARTED,
    "pending": TaskStatus.NOT_STARTED,
    "todo": TaskStatus.NOT_STARTED,
    "reject": TaskStatus.REJECTED,
    "rejected": TaskStatus.REJECTED,
}


def clean_status_emoji(text: str) -> str:
    """Usuwa znane glify dekoracyjne i białe znaki z brzegów."""
    result = text
    for glyph in STATUS_DECORATIONS:
        result = result.replace(glyph, "")
    return result.strip()


def parse_status(text: str) -> TaskStatus:
    """
        Zamienia swobodny tekst użytkownika na `TaskStatus`.

        - Usuwa glify z `STATUS_DECORATIONS`, przycina, zamienia na małe litery.
        - Dopasowanie jest dokładne (bez podciągów i "fuzzy" matchingu).

        :param text: Surowy tekst, np. "✅ Completed", "done", "In Progress".
        :raises InvalidStatusError: Gdy tekst nie pasuje do żadnego synonimu.
        :return: Dopasowany status.
    """
    key = clean_status_emoji(text).lower()
    try:
        return _SYNONYMS[key]
    except KeyError:
        raise InvalidStatusError(text) from None
