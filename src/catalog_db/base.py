"""
Common interface for catalog record stores.

A record is an open mapping of JSON-compatible values plus exactly one
identifier field named by its collection (``ProductID`` / ``CategoryID``).
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from .errors import InvalidRecord
from .schemas import Collection

Record = Dict[str, Any]


class RecordStore(ABC):
    """Persistence adapter shared by the PostgreSQL and JSON file variants"""

    backend_name: str = "abstract"

    @abstractmethod
    def list_records(self, collection: Collection) -> List[Record]:
        """Return every record in the collection."""

    @abstractmethod
    def create_record(self, collection: Collection, body: Record) -> Record:
        """Assign a fresh identifier to ``body``, persist it and return the stored record."""

    @abstractmethod
    def update_record(self, collection: Collection, record_id: str, body: Record) -> Record:
        """
        Shallow-merge ``body`` over the record identified by ``record_id``.

        The identifier field always keeps ``record_id``, whatever the body says.
        Raises ``RecordNotFound`` when no record matches.
        """

    @abstractmethod
    def delete_record(self, collection: Collection, record_id: str) -> None:
        """Remove the matching record or raise ``RecordNotFound``."""

    @abstractmethod
    def ping(self) -> None:
        """Raise ``StoreUnavailable`` if the store cannot serve requests."""

    def close(self) -> None:
        """Release any held resources."""


def merge_record(existing: Record, body: Record, id_field: str, record_id: str) -> Record:
    """Shallow merge used by every variant: body wins, identifier is pinned to ``record_id``."""
    merged = dict(existing)
    merged.update(body)
    merged[id_field] = record_id
    return merged


def check_json_compatible(body: Record) -> None:
    """Raise ``InvalidRecord`` unless ``body`` serializes as strict JSON."""
    try:
        json.dumps(body, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise InvalidRecord(str(e)) from e
