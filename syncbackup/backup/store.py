"""
Backup store for synced user data.

Keeps a rolling history of snapshots per resource under
{sync_home}/{resource_key}/{YYYYMMDDTHHMMSS}.json and prunes it after
every write. Backups are a safety net for the sync write path, so nothing
here ever raises to the caller: failures end up in the log.
"""

import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import Awaitable, Union

from syncbackup.configuration import ConfigurationService
from syncbackup.resources import ALL_RESOURCE_KEYS
from .retention import (
    backup_max_age,
    is_snapshot_name,
    select_for_deletion,
    snapshot_name,
)
from .storage import LocalStorage

logger = logging.getLogger(__name__)

BACKUP_DURATION_SETTING = 'sync.localBackupDuration'


class BackupStore:
    """
    Writes snapshots of sync resources and enforces their retention.

    Usage::

        store = BackupStore(LocalStorage(), ConfigurationService(settings_file), sync_home)
        await store.initialize()
        await store.backup('settings', content)
    """

    def __init__(
        self,
        storage: LocalStorage,
        configuration: ConfigurationService,
        sync_home: Union[str, Path]
    ):
        self.storage = storage
        self.configuration = configuration
        self.sync_home = Path(sync_home)

    def backup_folder(self, resource_key: str) -> Path:
        return self.sync_home / resource_key

    async def initialize(self):
        """
        Clean up the backups of every known resource.

        Run once after construction. Each resource is cleaned up on its own,
        so one failing folder does not hold back the others.
        """
        await asyncio.gather(
            *(self._clean_up_backup(resource_key) for resource_key in ALL_RESOURCE_KEYS)
        )

    async def backup(self, resource_key: str, content: str):
        """
        Store a snapshot of a resource and prune old ones.

        Two backups of the same resource within one second share a filename;
        the later one wins.

        Args:
            resource_key: One of ALL_RESOURCE_KEYS
            content: Serialized resource
        """
        if resource_key not in ALL_RESOURCE_KEYS:
            logger.error("Unknown resource key for backup: %s", resource_key)
            return

        resource = self.backup_folder(resource_key) / snapshot_name(datetime.now())
        await self._contain(self._write(resource, content))
        await self._contain(self._clean_up_backup(resource_key), quiet=True)

    async def _write(self, resource: Path, content: str):
        await self.storage.write_file(resource, content.encode('utf-8'))

    async def _clean_up_backup(self, resource_key: str):
        folder = self.backup_folder(resource_key)
        try:
            if not await self.storage.exists(folder):
                return
        except Exception:
            return

        await self._contain(self._prune(folder))

    async def _prune(self, folder: Path):
        stat = await self.storage.resolve(folder)
        if not stat.children:
            return

        snapshots = {
            child.name: child for child in stat.children
            if child.is_file and is_snapshot_name(child.name)
        }
        duration = await asyncio.to_thread(self.configuration.get_value, BACKUP_DURATION_SETTING)
        max_age = backup_max_age(duration)
        to_delete = select_for_deletion(
            [(name, child.ctime) for name, child in snapshots.items()],
            max_age,
            datetime.now().timestamp()
        )

        # Let every delete run to completion, then report the first failure
        results = await asyncio.gather(
            *(self._delete(snapshots[name].resource) for name in to_delete),
            return_exceptions=True
        )
        for result in results:
            if isinstance(result, Exception):
                raise result

    async def _delete(self, resource: Path):
        logger.info("Deleting from backup: %s", resource)
        await self.storage.delete(resource)

    async def _contain(self, operation: Awaitable, quiet: bool = False) -> bool:
        """
        Await a backup operation without letting its failure escape.

        Args:
            operation: Awaitable to run
            quiet: Swallow failures without logging them

        Returns:
            True if the operation completed
        """
        try:
            await operation
            return True
        except Exception as e:
            if not quiet:
                logger.error(f"Backup operation failed: {e}", exc_info=True)
            return False
