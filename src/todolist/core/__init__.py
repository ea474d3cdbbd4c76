"""Functional core - pure business logic with no I/O."""

from .tasks import Task, TaskCollection, TaskIndexError
from .view import (
    Row,
    Stats,
    TaskFilter,
    TaskSort,
    Urgency,
    View,
    build_view,
    classify_urgency,
    compute_stats,
    filter_tasks,
    sort_tasks,
    visible_rows,
)

__all__ = [
    # Tasks
    "Task",
    "TaskCollection",
    "TaskIndexError",
    # View
    "Row",
    "Stats",
    "TaskFilter",
    "TaskSort",
    "Urgency",
    "View",
    "build_view",
    "classify_urgency",
    "compute_stats",
    "filter_tasks",
    "sort_tasks",
    "visible_rows",
]
