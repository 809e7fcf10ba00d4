"""Record kinds stored by the catalog and the identifier field each one uses."""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class Collection:
    """Describes one kind of catalog record and how it is keyed."""
    name: str
    id_field: str
    id_prefix: str
    label: str


PRODUCTS = Collection(name="products", id_field="ProductID", id_prefix="prod_", label="Product")
CATEGORIES = Collection(name="categories", id_field="CategoryID", id_prefix="cat_", label="Category")

COLLECTIONS: Dict[str, Collection] = {c.name: c for c in (PRODUCTS, CATEGORIES)}
