"""
Shared pytest fixtures for syncbackup tests.

This module provides fixtures for:
- Sync home and settings file in a temporary directory
- LocalStorage, ConfigurationService and BackupStore instances
- Snapshot files at chosen ages
"""

import json
import logging
from datetime import datetime, timedelta

import pytest

from syncbackup.backup import BackupStore, LocalStorage
from syncbackup.backup.retention import snapshot_name
from syncbackup.configuration import ConfigurationService


@pytest.fixture(autouse=True)
def no_birth_time(monkeypatch):
    """
    Hide filesystem birth times so snapshot ages come from their names.

    Files created by a test are always brand new; only the name carries
    the age the test wants.
    """
    monkeypatch.setattr('syncbackup.backup.storage._creation_time', lambda stat_result: None)


@pytest.fixture
def sync_home(tmp_path):
    """Root of the backup folders (not created)."""
    return tmp_path / 'sync'


@pytest.fixture
def settings_file(tmp_path):
    """Path of the user settings file (not created)."""
    return tmp_path / 'settings.json'


@pytest.fixture
def write_settings(settings_file):
    """Write the given dict as the user settings."""
    def _write(settings):
        settings_file.write_text(json.dumps(settings))
    return _write


@pytest.fixture
def storage():
    return LocalStorage()


@pytest.fixture
def configuration(settings_file):
    return ConfigurationService(settings_file)


@pytest.fixture
def store(storage, configuration, sync_home):
    return BackupStore(storage, configuration, sync_home)


@pytest.fixture
def make_snapshots(sync_home):
    """
    Create snapshot files for a resource.

    Call with the ages (timedelta or days) of the snapshots to create,
    measured from now (or from the given reference time). Returns the
    created paths in the order of the ages given.
    """
    def _make(resource_key, ages, now=None, extension='.json'):
        now = now or datetime.now()
        folder = sync_home / resource_key
        folder.mkdir(parents=True, exist_ok=True)

        paths = []
        for age in ages:
            if not isinstance(age, timedelta):
                age = timedelta(days=age)
            name = snapshot_name(now - age)
            if not extension:
                name = name[:-len('.json')]
            path = folder / name
            path.write_text(f'snapshot {name}')
            paths.append(path)
        return paths
    return _make


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by configure_logging() during a test."""
    yield
    logger = logging.getLogger('syncbackup')
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
