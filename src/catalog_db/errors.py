"""Exceptions raised by record stores."""


class StoreError(Exception):
    """Base class for persistence failures."""


class RecordNotFound(StoreError):
    """No record in the collection carries the requested identifier."""

    def __init__(self, collection: str, record_id: str):
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"No record '{record_id}' in collection '{collection}'")


class StoreUnavailable(StoreError):
    """The backing store could not be reached."""


class InvalidRecord(StoreError):
    """The record holds values that are not standard JSON, such as NaN or Infinity."""
