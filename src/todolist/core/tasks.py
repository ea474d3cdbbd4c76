"""Pure task domain logic - no I/O dependencies."""

from dataclasses import dataclass, field, replace


class TaskIndexError(IndexError):
    """Raised when an operation targets a position outside the collection."""

    pass


@dataclass(frozen=True)
class Task:
    """A to-do item. Identified by its position in a TaskCollection."""

    text: str
    completed: bool = False
    deadline: str | None = None

    def to_dict(self) -> dict:
        """Serialize to the stored record shape."""
        return {
            "text": self.text,
            "completed": self.completed,
            "deadline": self.deadline or "",
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        """Create Task from a stored record."""
        return cls(
            text=data["text"],
            completed=bool(data.get("completed", False)),
            deadline=data.get("deadline") or None,
        )


@dataclass
class TaskCollection:
    """
    Ordered sequence of tasks. Insertion order is display order.

    Owns the add/update/remove/toggle mutations. Persistence is the
    caller's job.
    """

    tasks: list[Task] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.tasks)

    def __iter__(self):
        return iter(self.tasks)

    def __getitem__(self, index: int) -> Task:
        self._check_index(index)
        return self.tasks[index]

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.tasks):
            raise TaskIndexError(f"No task at position {index + 1} ({len(self.tasks)} tasks)")

    def add(self, text: str, deadline: str | None = None) -> Task | None:
        """Append a new incomplete task. Blank text is ignored."""
        text = text.strip()
        if not text:
            return None
        task = Task(text=text, completed=False, deadline=deadline or None)
        self.tasks.append(task)
        return task

    def update(self, index: int, text: str, deadline: str | None = None) -> Task | None:
        """Replace text and deadline at index, keeping the completed flag."""
        self._check_index(index)
        text = text.strip()
        if not text:
            return None
        task = replace(self.tasks[index], text=text, deadline=deadline or None)
        self.tasks[index] = task
        return task

    def remove(self, index: int) -> Task:
        """Delete the task at index. Later tasks shift down by one."""
        self._check_index(index)
        return self.tasks.pop(index)

    def toggle_completed(self, index: int) -> Task:
        """Flip the completed flag at index."""
        self._check_index(index)
        task = self.tasks[index]
        task = replace(task, completed=not task.completed)
        self.tasks[index] = task
        return task
