from .settings import settings
from .database import StoreError, StoreNotConfiguredError, SupabaseClient, get_store_client
from .table_names import TableNames

__all__ = [
    "settings",
    "get_store_client",
    "StoreError",
    "StoreNotConfiguredError",
    "SupabaseClient",
    "TableNames",
]
