"""Configuration package for the web application."""
import os
from pathlib import Path

from merit_fund.config.paths import get_cached_data_dir, get_logs_dir, get_project_root


class Config:
    """Base configuration."""
    def __init__(self):
        self.root_dir = get_project_root()
        self.init_app()

    def init_app(self):
        """Initialize application configuration."""
        self.CACHED_DATA_DIR = get_cached_data_dir()
        self.LOGS_DIR = get_logs_dir()
        self.DEFAULT_DAILY_AMOUNT = 100
        self.PULSE_CLEAR_DELAY = 0.6  # seconds before the "+amount" pulses are cleared
        # Day key for the once-per-day check; '%x' is the locale's short date
        self.DAY_FORMAT = '%x'
        self.APP_TITLE = '功德基金'


class DevelopmentConfig(Config):
    """Development configuration."""
    def init_app(self):
        super().init_app()
        self.DEBUG = True
        self.TESTING = False
        self.SECRET_KEY = 'dev'
        self.TEMPLATES_AUTO_RELOAD = True


class TestingConfig(Config):
    """Testing configuration."""
    def init_app(self):
        super().init_app()
        self.DEBUG = True
        self.TESTING = True
        self.SECRET_KEY = 'test'
        self.TEMPLATES_AUTO_RELOAD = True
        # Override paths for testing environment
        self.CACHED_DATA_DIR = Path(os.path.join(self.root_dir, 'tests', 'test_data', 'cached_data'))
        self.PULSE_CLEAR_DELAY = 0.05


class ProductionConfig(Config):
    """Production configuration."""
    def init_app(self):
        super().init_app()
        self.DEBUG = False
        self.TESTING = False
        self.SECRET_KEY = os.environ.get('SECRET_KEY', 'change-this-in-production')
        self.TEMPLATES_AUTO_RELOAD = False


config = {
    'development': DevelopmentConfig(),
    'testing': TestingConfig(),
    'production': ProductionConfig(),
    'default': DevelopmentConfig()
}
