"""Background reconciliation between primary and secondary stores."""

from .background import BackgroundQueue, SyncEvent, SyncMessage, SyncTask
from .error_tracker import ErrorTracker
from .reconciler import Reconciler

__all__ = [
    'BackgroundQueue',
    'SyncEvent',
    'SyncMessage',
    'SyncTask',
    'ErrorTracker',
    'Reconciler'
]
