class StoreUnavailableError(Exception):
    """The persistent store could not be read or written. Retriable."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Store unavailable during {operation}")


class DuplicateRecordError(Exception):
    """A uniqueness constraint rejected the write."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Duplicate record during {operation}")
