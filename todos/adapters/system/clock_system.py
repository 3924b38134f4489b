from datetime import datetime, timezone

from todos.ports.clock import Clock

class SystemClock(Clock):
    """Adapter systemowy: bieżący czas UTC, z dokładnością do sekundy
    (taką, jaką i tak pokazujemy w `completedAt`)."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc).replace(microsecond=0)
