"""An index writer that ignores every write."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class NoopRelIndexWrite:
    """Index writer whose inserts and merges do nothing."""

    def index_insert(self, key: Any, value: Any) -> None:
        """Ignore the insertion."""

    def move_index_contents(self, other: NoopRelIndexWrite) -> None:
        """Ignore the merge."""