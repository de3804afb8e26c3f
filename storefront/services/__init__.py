# storefront/services/__init__.py
from .base import is_storable_id, require_positive_int, store_operation
from .cart import CartService
from .catalog import CatalogService

__all__ = ["CartService", "CatalogService", "is_storable_id", "require_positive_int", "store_operation"]
