"""A small list model addressed by (row, column) indexes and integer roles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from corplayer.signals import Signal


@dataclass(frozen=True)
class ModelIndex:
    """A position in an ItemModel; the default index is invalid."""

    model: ItemModel | None = None
    row: int = -1
    column: int = -1

    @property
    def is_valid(self) -> bool:
        return self.model is not None and self.row >= 0 and self.column >= 0

    def data(self, role: int) -> Any:
        if not self.is_valid:
            return None
        return self.model.data(self, role)


class ItemModel:
    """Rows of role-to-value mappings; every column of a row shares its data.

    ``data_changed`` is emitted as (top_left, bottom_right, roles).
    """

    def __init__(self, column_count: int = 1) -> None:
        if column_count < 1:
            raise ValueError("column_count must be at least 1")
        self.column_count = column_count
        self._rows: list[dict[int, Any]] = []
        self.data_changed = Signal()

    def __hash__(self) -> int:
        return id(self)

    def __eq__(self, other: object) -> bool:
        return self is other

    def row_count(self) -> int:
        return len(self._rows)

    def index(self, row: int, column: int = 0) -> ModelIndex:
        if 0 <= row < len(self._rows) and 0 <= column < self.column_count:
            return ModelIndex(self, row, column)
        return ModelIndex()

    def append_row(self, values: Mapping[int, Any]) -> ModelIndex:
        self._rows.append(dict(values))
        return ModelIndex(self, len(self._rows) - 1, 0)

    def _owns(self, index: ModelIndex) -> bool:
        return (
            index.is_valid
            and index.model is self
            and index.row < len(self._rows)
            and index.column < self.column_count
        )

    def data(self, index: ModelIndex, role: int) -> Any:
        if not self._owns(index):
            return None
        return self._rows[index.row].get(role)

    def set_data(self, index: ModelIndex, value: Any, role: int) -> bool:
        """Store ``value``; False if the index does not belong to this model."""
        if not self._owns(index):
            return False
        row = self._rows[index.row]
        if role in row and row[role] == value:
            return True
        row[role] = value
        self.data_changed.emit(index, index, [role])
        return True