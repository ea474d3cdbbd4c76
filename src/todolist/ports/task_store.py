"""Task store interface."""

from typing import Protocol

from todolist.core.tasks import Task


class TaskStore(Protocol):
    """Interface for loading and saving the whole task collection."""

    def load(self) -> list[Task] | None:
        """Load all tasks. Returns None if nothing usable is stored."""
        ...

    def save(self, tasks: list[Task]) -> None:
        """Persist the full collection, replacing whatever was stored."""
        ...
