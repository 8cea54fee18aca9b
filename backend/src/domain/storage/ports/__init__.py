from .record_store_port import RecordSetPort, RecordStorePort, StorageTransactionPort
from .session_store_port import SessionStorePort

__all__ = [
    "RecordSetPort",
    "RecordStorePort",
    "StorageTransactionPort",
    "SessionStorePort",
]
