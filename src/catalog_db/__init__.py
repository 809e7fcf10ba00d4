"""
Catalog persistence layer.

Record stores keep open-schema JSON documents (products and categories) either
as JSONB rows in PostgreSQL or in a single JSON file on local disk.
"""

from .base import Record, RecordStore, check_json_compatible
from .schemas import CATEGORIES, COLLECTIONS, PRODUCTS, Collection
from .errors import InvalidRecord, RecordNotFound, StoreError, StoreUnavailable

__all__ = [
    'Record', 'RecordStore',
    'Collection', 'PRODUCTS', 'CATEGORIES', 'COLLECTIONS',
    'StoreError', 'RecordNotFound', 'StoreUnavailable', 'InvalidRecord',
    'check_json_compatible',
]
