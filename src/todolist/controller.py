"""Interaction controller - turns user events into state transitions."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable

from .core.tasks import Task, TaskCollection
from .core.view import DUE_SOON_WINDOW, TaskFilter, TaskSort, View, build_view
from .notifications import TASK_ADDED, TASK_DELETED, TASK_EDITED, Notifier
from .ports.task_store import TaskStore

logger = logging.getLogger(__name__)


@dataclass
class EditSession:
    """Staged form input. index is None while composing a new task."""

    text: str = ""
    deadline: str = ""
    index: int | None = None

    @property
    def is_editing(self) -> bool:
        return self.index is not None

    def clear(self) -> None:
        self.text = ""
        self.deadline = ""
        self.index = None


@dataclass
class AppState:
    """All state for one session."""

    collection: TaskCollection = field(default_factory=TaskCollection)
    task_filter: TaskFilter = TaskFilter.ALL
    task_sort: TaskSort = TaskSort.DEFAULT
    session: EditSession = field(default_factory=EditSession)


Listener = Callable[[AppState], None]


class TodoController:
    """
    Owns the application state and applies user events to it.

    The collection is loaded once on construction and saved in full after
    every mutation. Listeners are notified after every state change.
    """

    def __init__(
        self,
        store: TaskStore,
        notifier: Notifier | None = None,
        due_soon_window: timedelta = DUE_SOON_WINDOW,
    ):
        self.store = store
        self.notifier = notifier or Notifier()
        self.notifier.on_change = self._emit
        self.due_soon_window = due_soon_window
        self._listeners: list[Listener] = []

        loaded = store.load()
        self.state = AppState(collection=TaskCollection(loaded or []))
        logger.info(f"Session started with {len(self.state.collection)} tasks")

    # ============== Subscriptions ==============

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call listener after every change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self) -> None:
        for listener in list(self._listeners):
            listener(self.state)

    def _persist(self) -> None:
        self.store.save(self.state.collection.tasks)

    # ============== Read side ==============

    @property
    def tasks(self) -> list[Task]:
        return list(self.state.collection)

    @property
    def primary_action_label(self) -> str:
        return "Edit Task" if self.state.session.is_editing else "Add Task"

    def view(self, now: datetime | None = None) -> View:
        """Compute the current render snapshot."""
        return build_view(
            self.state.collection.tasks,
            now or datetime.now(),
            task_filter=self.state.task_filter,
            task_sort=self.state.task_sort,
            editing_index=self.state.session.index,
            notification=self.notifier.current,
            window=self.due_soon_window,
        )

    # ============== Edit session ==============

    def set_text(self, value: str) -> None:
        self.state.session.text = value
        self._emit()

    def set_deadline(self, value: str | None) -> None:
        self.state.session.deadline = value or ""
        self._emit()

    def begin_edit(self, index: int) -> None:
        """Stage the task at index into the form."""
        task = self.state.collection[index]
        session = self.state.session
        session.index = index
        session.text = task.text
        session.deadline = task.deadline or ""
        logger.debug(f"Editing task {index}")
        self._emit()

    def cancel_edit(self) -> None:
        """Drop the staged input and return to composing."""
        self.state.session.clear()
        self._emit()

    def commit(self) -> Task | None:
        """
        Submit the form: add a task, or update the one being edited.

        Blank text is a no-op with no notification.
        """
        session = self.state.session
        if not session.text.strip():
            return None

        collection = self.state.collection
        if session.is_editing:
            index = session.index
            task = collection.update(index, session.text, session.deadline)
            message = TASK_EDITED
            logger.debug(f"Edited task {index}: {task.text!r}")
        else:
            task = collection.add(session.text, session.deadline)
            message = TASK_ADDED
            logger.debug(f"Added task {len(collection) - 1}: {task.text!r}")

        self._persist()
        session.clear()
        self.notifier.show(message)
        self._emit()
        return task

    # ============== Direct actions ==============

    def add(self, text: str, deadline: str | None = None) -> Task | None:
        """
        Add a new task in one step.

        Bypasses the form, so a staged edit stays as it was. Blank text is a
        no-op with no notification.
        """
        collection = self.state.collection
        task = collection.add(text, deadline)
        if task is None:
            return None
        logger.debug(f"Added task {len(collection) - 1}: {task.text!r}")
        self._persist()
        self.notifier.show(TASK_ADDED)
        self._emit()
        return task

    def edit(self, index: int, text: str, deadline: str | None = None) -> Task | None:
        """Stage the task at index, replace its input, and submit."""
        self.begin_edit(index)
        self.state.session.text = text
        if deadline is not None:
            self.state.session.deadline = deadline
        return self.commit()

    def remove(self, index: int) -> Task:
        """Delete the task at index."""
        task = self.state.collection.remove(index)
        logger.debug(f"Deleted task {index}: {task.text!r}")

        # Keep a pending edit pointed at the same task
        session = self.state.session
        if session.index is not None:
            if session.index == index:
                session.clear()
            elif session.index > index:
                session.index -= 1

        self._persist()
        self.notifier.show(TASK_DELETED)
        self._emit()
        return task

    def toggle_completed(self, index: int) -> Task:
        """Flip the completed flag at index."""
        task = self.state.collection.toggle_completed(index)
        logger.debug(f"Toggled task {index}: completed={task.completed}")
        self._persist()
        self._emit()
        return task

    # ============== View selection ==============

    def set_filter(self, value: TaskFilter | str) -> None:
        self.state.task_filter = TaskFilter(value)
        self._emit()

    def set_sort(self, value: TaskSort | str) -> None:
        self.state.task_sort = TaskSort(value)
        self._emit()
