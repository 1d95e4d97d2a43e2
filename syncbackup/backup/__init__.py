"""
Backup module for syncbackup.

This module handles:
- Snapshot storage on the local filesystem
- Retention policy (age limit with a retained count floor)
- The backup store tying both together
"""

from .storage import LocalStorage, FileStat, StorageError
from .retention import select_for_deletion, parse_snapshot_time, snapshot_name
from .store import BackupStore

__all__ = [
    'LocalStorage',
    'FileStat',
    'StorageError',
    'select_for_deletion',
    'parse_snapshot_time',
    'snapshot_name',
    'BackupStore'
]
