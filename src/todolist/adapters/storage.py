"""Task storage adapter - the collection as a JSON blob in a key-value store."""

import json
import logging

from todolist.core.tasks import Task
from todolist.ports.kv_store import KeyValueStore

logger = logging.getLogger(__name__)

TASKS_KEY = "tasks"


class KeyValueTaskStore:
    """
    Whole-collection persistence under a fixed key.

    Implements TaskStore protocol. Every save rewrites the full collection;
    no partial updates, no versioning.
    """

    def __init__(self, kv: KeyValueStore, key: str = TASKS_KEY):
        self.kv = kv
        self.key = key

    def load(self) -> list[Task] | None:
        """Load all tasks. Returns None if the blob is absent or unparseable."""
        blob = self.kv.get_item(self.key)
        if blob is None:
            return None
        try:
            data = json.loads(blob)
            if not isinstance(data, list):
                raise TypeError(f"expected a list, got {type(data).__name__}")
            tasks = [Task.from_dict(item) for item in data]
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            logger.warning(f"Ignoring unreadable '{self.key}' entry: {e}")
            return None
        logger.debug(f"Loaded {len(tasks)} tasks")
        return tasks

    def save(self, tasks: list[Task]) -> None:
        """Persist the full collection."""
        self.kv.set_item(self.key, json.dumps([t.to_dict() for t in tasks]))
        logger.debug(f"Saved {len(tasks)} tasks")
