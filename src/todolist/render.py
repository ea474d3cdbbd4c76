"""Terminal rendering of a computed view."""

import click

from .core.view import Row, Stats, TaskFilter, TaskSort, Urgency, View

URGENCY_COLORS = {
    Urgency.OVERDUE: "red",
    Urgency.DUE_SOON: "yellow",
    Urgency.NORMAL: None,
}

FILTER_LABELS = {
    TaskFilter.ALL: "All",
    TaskFilter.COMPLETED: "Completed",
    TaskFilter.NOT_COMPLETED: "Not Completed",
}

SORT_LABELS = {
    TaskSort.DEFAULT: "Default",
    TaskSort.ALPHABETICAL: "Alphabetical",
    TaskSort.COMPLETED: "Completed",
}


def format_row(row: Row, editing: bool = False, color: bool = True) -> str:
    """Format one task line: position, checkbox, text, deadline."""
    check = "x" if row.task.completed else " "
    marker = "*" if editing else " "
    text = row.task.text
    if color:
        text = click.style(
            text,
            fg=URGENCY_COLORS[row.urgency],
            strikethrough=row.task.completed,
        )
    deadline = f"  ({row.task.deadline})" if row.task.deadline else ""
    return f"{marker}{row.index + 1:>3}. [{check}] {text}{deadline}"


def format_stats(stats: Stats) -> str:
    return f"Completed tasks: {stats.completed}/{stats.total}"


def render_view(view: View, color: bool = True) -> list[str]:
    """
    Render the whole list screen.

    Numbers shown are 1-based positions in the underlying collection, so
    they stay valid whichever filter or sort is active.
    """
    lines = [
        f"To-Do List  [filter: {FILTER_LABELS[view.task_filter]}]"
        f"  [sort: {SORT_LABELS[view.task_sort]}]"
    ]
    if view.rows:
        for row in view.rows:
            lines.append(format_row(row, row.index == view.editing_index, color))
    else:
        lines.append("  No tasks.")
    lines.append(format_stats(view.stats))
    if view.notification:
        banner = f">> {view.notification}"
        lines.append(click.style(banner, fg="green", bold=True) if color else banner)
    return lines


def view_to_json(view: View) -> list[dict]:
    """Rows as plain records for --json output."""
    return [
        {
            "position": row.index + 1,
            **row.task.to_dict(),
            "urgency": row.urgency.value,
        }
        for row in view.rows
    ]
