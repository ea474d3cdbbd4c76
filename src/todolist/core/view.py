"""Pure derived-view logic - filtering, sorting, urgency, statistics."""

import unicodedata
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Iterable

from .tasks import Task

DUE_SOON_WINDOW = timedelta(hours=24)


class TaskFilter(Enum):
    """Which tasks the list shows."""

    ALL = "all"
    COMPLETED = "completed"
    NOT_COMPLETED = "notCompleted"


class TaskSort(Enum):
    """Display order of the filtered list."""

    DEFAULT = "default"
    ALPHABETICAL = "alphabetical"
    COMPLETED = "completed"  # incomplete first


class Urgency(Enum):
    """Deadline urgency, used only for coloring."""

    OVERDUE = "overdue"
    DUE_SOON = "due-soon"
    NORMAL = "normal"


@dataclass(frozen=True)
class Stats:
    """Completion counts over the whole collection."""

    completed: int
    total: int


@dataclass(frozen=True)
class Row:
    """A displayed task plus its position in the underlying collection."""

    index: int
    task: Task
    urgency: Urgency


@dataclass(frozen=True)
class View:
    """Everything the presentation layer needs for one render."""

    rows: list[Row]
    stats: Stats
    task_filter: TaskFilter
    task_sort: TaskSort
    editing_index: int | None
    action_label: str
    notification: str | None


def filter_tasks(
    tasks: Iterable[tuple[int, Task]], task_filter: TaskFilter
) -> list[tuple[int, Task]]:
    """Keep (index, task) pairs matching the filter."""
    if task_filter is TaskFilter.COMPLETED:
        return [(i, t) for i, t in tasks if t.completed]
    if task_filter is TaskFilter.NOT_COMPLETED:
        return [(i, t) for i, t in tasks if not t.completed]
    return list(tasks)


def collation_key(text: str) -> tuple[str, str, str]:
    """
    Sort key approximating locale-aware string comparison.

    Primary: base letters, case-insensitive, accents stripped.
    Secondary: accents. Tertiary: lowercase before uppercase.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return (base.casefold(), decomposed.casefold(), text.swapcase())


def sort_tasks(
    tasks: Iterable[tuple[int, Task]], task_sort: TaskSort
) -> list[tuple[int, Task]]:
    """
    Order (index, task) pairs for display.

    Returns a new list; sorted() is stable, so the completed sort is a
    partition that keeps relative order within each group.
    """
    if task_sort is TaskSort.ALPHABETICAL:
        return sorted(tasks, key=lambda pair: collation_key(pair[1].text))
    if task_sort is TaskSort.COMPLETED:
        return sorted(tasks, key=lambda pair: pair[1].completed)
    return list(tasks)


def parse_deadline(deadline: str | None) -> datetime | None:
    """Parse a stored deadline string. Returns None if absent or unparseable."""
    if not deadline:
        return None
    try:
        return datetime.fromisoformat(deadline.strip())
    except ValueError:
        return None


def classify_urgency(
    deadline: str | None,
    now: datetime,
    window: timedelta = DUE_SOON_WINDOW,
) -> Urgency:
    """
    Classify a deadline against an explicit current time.

    Past deadline = overdue, within the window = due soon, anything else
    (including no deadline) = normal.
    """
    when = parse_deadline(deadline)
    if when is None:
        return Urgency.NORMAL

    # Compare mixed naive/aware values in local time
    if when.tzinfo is not None and now.tzinfo is None:
        now = now.astimezone()
    elif when.tzinfo is None and now.tzinfo is not None:
        when = when.astimezone(now.tzinfo)

    if when < now:
        return Urgency.OVERDUE
    if when - now < window:
        return Urgency.DUE_SOON
    return Urgency.NORMAL


def compute_stats(tasks: Iterable[Task]) -> Stats:
    """Count completed and total tasks, ignoring any filter."""
    tasks = list(tasks)
    return Stats(completed=sum(1 for t in tasks if t.completed), total=len(tasks))


def visible_rows(
    tasks: list[Task],
    task_filter: TaskFilter = TaskFilter.ALL,
    task_sort: TaskSort = TaskSort.DEFAULT,
) -> list[tuple[int, Task]]:
    """Filter then sort, keeping each task's underlying index."""
    return sort_tasks(filter_tasks(enumerate(tasks), task_filter), task_sort)


def build_view(
    tasks: list[Task],
    now: datetime,
    task_filter: TaskFilter = TaskFilter.ALL,
    task_sort: TaskSort = TaskSort.DEFAULT,
    editing_index: int | None = None,
    notification: str | None = None,
    window: timedelta = DUE_SOON_WINDOW,
) -> View:
    """
    Assemble a render snapshot from the collection and selection state.

    Pure function - recomputed from scratch on every call.
    """
    rows = [
        Row(index=i, task=t, urgency=classify_urgency(t.deadline, now, window))
        for i, t in visible_rows(tasks, task_filter, task_sort)
    ]
    return View(
        rows=rows,
        stats=compute_stats(tasks),
        task_filter=task_filter,
        task_sort=task_sort,
        editing_index=editing_index,
        action_label="Edit Task" if editing_index is not None else "Add Task",
        notification=notification,
    )
