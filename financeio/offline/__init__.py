"""Client offline: storage locale e coda di sincronizzazione delle richieste."""
from financeio.offline.storage import LocalStorage  # noqa: F401
from financeio.offline.sync import OfflineSyncClient, SyncResult  # noqa: F401
