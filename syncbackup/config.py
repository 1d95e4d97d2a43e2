import os


class Config:
    """Base configuration"""

    DEBUG = False

    # User data directory; everything else defaults to a location inside it
    USER_DATA_DIR = os.environ.get('USER_DATA_DIR') or os.path.join(os.path.expanduser('~'), '.syncbackup')

    # Root of the per-resource backup folders
    USER_DATA_SYNC_HOME = os.environ.get('USER_DATA_SYNC_HOME') or os.path.join(USER_DATA_DIR, 'sync')

    # User settings (sync.localBackupDuration lives here)
    SETTINGS_FILE = os.environ.get('SETTINGS_FILE') or os.path.join(USER_DATA_DIR, 'settings.json')

    # Logging
    LOG_DIR = os.environ.get('LOG_DIR') or os.path.join(USER_DATA_DIR, 'logs')


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = os.environ.get('DEBUG', 'true').lower() == 'true'

    # Use local data directory for development
    BASE_DIR = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    DATA_DIR = os.path.join(BASE_DIR, 'data')
    USER_DATA_SYNC_HOME = os.path.join(DATA_DIR, 'sync')
    SETTINGS_FILE = os.path.join(DATA_DIR, 'settings.json')
    LOG_DIR = os.path.join(DATA_DIR, 'logs')


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration, paths are overridden by the test fixtures"""
    DEBUG = True
    LOG_DIR = None


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': ProductionConfig
}
