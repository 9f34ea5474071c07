# collab/domain/results.py
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Accepted:
    value: Any = None


@dataclass(frozen=True)
class Rejected:
    reason: str


@dataclass(frozen=True)
class Failed:
    error: Exception

    @property
    def reason(self) -> str:
        return str(self.error)


Result = Accepted | Rejected | Failed
