"""In-memory key-value storage adapter."""


class MemoryKeyValueStore:
    """
    Dict-backed key-value storage.

    Implements KeyValueStore protocol. Nothing survives the process; useful
    for tests and throwaway sessions.
    """

    def __init__(self, initial: dict[str, str] | None = None):
        self.items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value
