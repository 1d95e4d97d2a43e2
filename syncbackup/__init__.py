import os
import logging
from logging.handlers import RotatingFileHandler


def configure_logging(cfg):
    """Configure application logging"""

    # Set log level based on environment
    log_level = logging.DEBUG if cfg.DEBUG else logging.INFO

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_formatter = logging.Formatter(
        '[%(asctime)s] %(levelname)s in %(module)s: %(message)s'
    )
    console_handler.setFormatter(console_formatter)
    handlers = [console_handler]

    # File handler, skipped when no log directory is configured
    if cfg.LOG_DIR:
        os.makedirs(cfg.LOG_DIR, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(cfg.LOG_DIR, 'syncbackup.log'),
            maxBytes=10485760,  # 10MB
            backupCount=10
        )
        file_handler.setLevel(log_level)
        file_formatter = logging.Formatter(
            '[%(asctime)s] %(levelname)s [%(name)s.%(funcName)s:%(lineno)d] %(message)s'
        )
        file_handler.setFormatter(file_formatter)
        handlers.append(file_handler)

    # Configure package logger
    logger = logging.getLogger(__name__)
    logger.setLevel(log_level)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    for handler in handlers:
        logger.addHandler(handler)

    logger.info(f"Logging configured (level: {logging.getLevelName(log_level)})")
    return logger


def create_store(config_name=None):
    """
    Backup store factory.

    The returned store has not cleaned up yet; await or schedule
    store.initialize() once an event loop is running.
    """
    if config_name is None:
        config_name = os.environ.get('SYNCBACKUP_ENV', 'production')

    from syncbackup.config import config
    cfg = config[config_name]

    # Configure logging
    logger = configure_logging(cfg)

    from syncbackup.backup import BackupStore, LocalStorage
    from syncbackup.configuration import ConfigurationService

    store = BackupStore(
        storage=LocalStorage(),
        configuration=ConfigurationService(cfg.SETTINGS_FILE),
        sync_home=cfg.USER_DATA_SYNC_HOME
    )
    logger.info(f"Backup store ready (sync home: {cfg.USER_DATA_SYNC_HOME})")
    return store
