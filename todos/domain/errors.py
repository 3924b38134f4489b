### COMMENTS
# ============================================
# Konwencja użycia błędów domenowych w projekcie
# ============================================
# - Domena (TodoList, parse_status):
#     * brak zadania o danym id → TaskNotFoundError
#     * nieznany status → InvalidStatusError (z oryginalnym tekstem)
#
# - Adaptery trwałości:
#     * mapują błędy techniczne (OSError, JSONDecodeError, SQLAlchemyError) na StorageError
#     * uszkodzone rekordy dokumentu → TaskValidationError
#
# - CLI:
#     * rozbija argumenty `id:wartość`, zła forma → InvalidFormatError
#     * łapie DomainError, pokazuje czerwony panel i kończy proces kodem 1


class DomainError(Exception):
    """Bazowa klasa dla błędów domenowych.
    Umożliwia odróżnienie błędów domeny (logika aplikacji) od błędów technicznych.
    Nie powinna być rzucana bezpośrednio: używaj klas pochodnych.
    """


class TaskNotFoundError(DomainError):
    """Rzucany, gdy żądane zadanie nie istnieje w kolekcji.
    Zgłaszany przez każdą operację adresowaną po id: `find_by_id()`, `find_index_by_id()`,
    `delete()`, `edit_title()`, `update_status()`.
    """
    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(self.__str__())
    def __str__(self):
        return f"Zadanie o ID {self.task_id} nie istnieje."


class InvalidStatusError(DomainError):
    """Rzucany przez `parse_status`, gdy tekst po normalizacji nie pasuje do żadnego statusu.
    Przechowuje oryginalne (nieoczyszczone) wejście w `raw` do diagnostyki.
    """
    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(self.__str__())
    def __str__(self):
        return f"Niepoprawny status: {self.raw!r}"


class InvalidFormatError(DomainError):
    """Rzucany przez warstwę CLI, gdy argument nie ma postaci `id:wartość`
    albo `id` nie jest liczbą całkowitą.
    """
    def __init__(self, field: str, raw: str, hint: str = ""):
        self.field = field
        self.raw = raw
        self.hint = hint
        super().__init__(self.__str__())
    def __str__(self):
        msg = f"Niepoprawny format dla '{self.field}': {self.raw!r}"
        if self.hint:
            msg += f" (użyj {self.hint})"
        return msg


class TaskValidationError(DomainError):
    """Rzucany, gdy rekord zapisanego dokumentu nie spełnia reguł modelu.
    Przykłady:
    - brak wymaganego klucza (`id`, `task`, `status`),
    - zduplikowane `id`,
    - `completedAt` obecne przy statusie innym niż Completed (lub odwrotnie).
    Zawiera nazwę pola (`field`) i czytelny komunikat (`message`).
    """
    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(self.__str__())
    def __str__(self):
        return f"Błąd walidacji pola '{self.field}': {self.message}"


class StorageError(DomainError):
    """Techniczny błąd odczytu/zapisu (plik, baza) zmapowany na błąd domenowy."""
