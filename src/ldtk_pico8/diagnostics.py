"""Non-fatal conversion diagnostics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List

WARNING = "warning"
INFO = "info"


@dataclass(frozen=True)
class Diagnostic:
    level: str
    message: str

    def __str__(self) -> str:
        return f"{self.level.capitalize()}: {self.message}"


class Diagnostics:
    """Collects warnings raised while converting instead of printing them.

    Components hand their collector back with their result so the caller
    decides where (and whether) the messages end up.
    """

    def __init__(self, entries: Iterable[Diagnostic] = ()):
        self.entries: List[Diagnostic] = list(entries)

    def warn(self, message: str) -> None:
        self.entries.append(Diagnostic(WARNING, message))

    def info(self, message: str) -> None:
        self.entries.append(Diagnostic(INFO, message))

    def extend(self, other: Iterable[Diagnostic]) -> None:
        self.entries.extend(other)

    def messages(self, level: str | None = None) -> List[str]:
        return [d.message for d in self.entries if level is None or d.level == level]

    @property
    def warnings(self) -> List[str]:
        return self.messages(WARNING)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"Diagnostics({self.entries!r})"
