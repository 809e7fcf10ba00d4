"""
Flat-file record store.

Both collections are held in memory as insertion-ordered lists and written
together to a single JSON document after every mutation:

    {"products": [...], "categories": [...]}
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Dict, List, Optional, Union

from .base import Record, RecordStore, check_json_compatible, merge_record
from .errors import RecordNotFound, StoreError, StoreUnavailable
from .ids import generate_id
from .schemas import COLLECTIONS, Collection

logger = logging.getLogger(__name__)


class JsonFileRecordStore(RecordStore):
    """Record store backed by one JSON file, rewritten atomically on each mutation"""

    backend_name = "json-file"

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = threading.RLock()
        self._data: Dict[str, List[Record]] = self._load()

    def _load(self) -> Dict[str, List[Record]]:
        """Read the data file, creating an empty one when it does not exist yet"""
        data: Dict[str, List[Record]] = {name: [] for name in COLLECTIONS}
        if not self.path.exists():
            logger.info(f"Data file {self.path} not found, starting with empty collections")
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._write(data)
            return data

        try:
            with self.path.open("r", encoding="utf-8") as f:
                stored = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Error reading data file {self.path}: {e}")
            raise StoreUnavailable(f"Cannot read data file {self.path}") from e

        if not isinstance(stored, dict):
            raise StoreError(f"Data file {self.path} does not contain a JSON object")

        for name in COLLECTIONS:
            records = stored.get(name, [])
            if not isinstance(records, list):
                raise StoreError(f"Collection '{name}' in {self.path} is not a list")
            data[name] = records

        logger.info(
            f"Loaded {sum(len(v) for v in data.values())} records from {self.path}"
        )
        return data

    def _write(self, data: Dict[str, List[Record]]) -> None:
        """Write to a temp file in the same directory, then rename over the target"""
        fd, tmp_path = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, allow_nan=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def _flush(self) -> None:
        try:
            self._write(self._data)
        except OSError as e:
            logger.error(f"Error writing data file {self.path}: {e}")
            raise StoreError(f"Cannot write data file {self.path}") from e

    def _records(self, collection: Collection) -> List[Record]:
        return self._data[collection.name]

    def _find_index(self, collection: Collection, record_id: str) -> Optional[int]:
        for index, record in enumerate(self._records(collection)):
            if record.get(collection.id_field) == record_id:
                return index
        return None

    def list_records(self, collection: Collection) -> List[Record]:
        with self._lock:
            return [dict(record) for record in self._records(collection)]

    def create_record(self, collection: Collection, body: Record) -> Record:
        check_json_compatible(body)
        with self._lock:
            record_id = generate_id(collection.id_prefix)
            while self._find_index(collection, record_id) is not None:
                logger.warning(f"Identifier collision on {record_id}, drawing a new one")
                record_id = generate_id(collection.id_prefix)

            record = dict(body)
            record[collection.id_field] = record_id
            records = self._records(collection)
            records.append(record)
            try:
                self._flush()
            except StoreError:
                records.pop()
                raise
            return dict(record)

    def update_record(self, collection: Collection, record_id: str, body: Record) -> Record:
        check_json_compatible(body)
        with self._lock:
            index = self._find_index(collection, record_id)
            if index is None:
                raise RecordNotFound(collection.name, record_id)

            records = self._records(collection)
            previous = records[index]
            records[index] = merge_record(previous, body, collection.id_field, record_id)
            try:
                self._flush()
            except StoreError:
                records[index] = previous
                raise
            return dict(records[index])

    def delete_record(self, collection: Collection, record_id: str) -> None:
        with self._lock:
            index = self._find_index(collection, record_id)
            if index is None:
                raise RecordNotFound(collection.name, record_id)

            records = self._records(collection)
            removed = records.pop(index)
            try:
                self._flush()
            except StoreError:
                records.insert(index, removed)
                raise

    def ping(self) -> None:
        if not self.path.parent.is_dir():
            raise StoreUnavailable(f"Data directory {self.path.parent} is missing")
