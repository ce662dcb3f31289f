"""
Partial UPDATE construction from a sparse set of optional fields.

Each entity declares one ordered tuple of UpdateField. build_update walks
that tuple, so SET clauses and bind values are appended together and
always in the declared order, whatever order the caller supplied.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Sequence, Tuple

PLACEHOLDER = "?"


@dataclass(frozen=True)
class UpdateField:
    """One updatable attribute: where it is read from and which column it writes."""
    attr: str
    column: Optional[str] = None
    transform: Optional[Callable[[Any], Any]] = None

    @property
    def column_name(self) -> str:
        return self.column or self.attr


class UpdateCommand:
    """UPDATE statement for a single row, keyed by key_column = key."""

    def __init__(self, table: str, key_column: str, key: Any):
        self.table = table
        self.key_column = key_column
        self.key = key
        self._assignments: List[Tuple[str, Any]] = []

    def set(self, column: str, value: Any) -> "UpdateCommand":
        self._assignments.append((column, value))
        return self

    @property
    def is_empty(self) -> bool:
        return not self._assignments

    @property
    def clauses(self) -> List[str]:
        return [f"{column} = {PLACEHOLDER}" for column, _ in self._assignments]

    @property
    def params(self) -> Tuple[Any, ...]:
        """Bind values in clause order, with the key always last."""
        return tuple(value for _, value in self._assignments) + (self.key,)

    def render(self, placeholder: str = PLACEHOLDER) -> str:
        if self.is_empty:
            raise ValueError("UpdateCommand has no assignments")
        assignments = ", ".join(f"{column} = {placeholder}" for column, _ in self._assignments)
        return f"UPDATE {self.table} SET {assignments} WHERE {self.key_column} = {placeholder}"

    def __repr__(self) -> str:
        columns = [column for column, _ in self._assignments]
        return f"UpdateCommand(table={self.table!r}, columns={columns}, key={self.key!r})"


def _storage_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return value


def build_update(
    table: str,
    key_column: str,
    key: Any,
    fields: Sequence[UpdateField],
    data: Any
) -> UpdateCommand:
    """
    Build an UpdateCommand from the non-None attributes of data.

    Values with a transform (e.g. password hashing) are transformed before
    they are bound; the raw value never reaches the command.
    """
    command = UpdateCommand(table, key_column, key)
    for field in fields:
        value = getattr(data, field.attr, None)
        if value is None:
            continue
        if field.transform is not None:
            value = field.transform(value)
        command.set(field.column_name, _storage_value(value))
    return command
