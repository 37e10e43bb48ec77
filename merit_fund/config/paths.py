"""
Centralized path configuration for the merit fund app.
Provides absolute paths that can be reliably referenced from anywhere in the project.
"""
import os
from pathlib import Path


class ProjectPaths:
    """Centralized path configuration for the project."""

    # Singleton instance
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ProjectPaths, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        # This file is at merit_fund/config/paths.py, so we go up 3 levels to get to project root
        self._project_root = Path(__file__).parent.parent.parent.absolute()

        # MERIT_FUND_DATA_DIR moves persisted state out of the checkout
        data_dir = os.environ.get('MERIT_FUND_DATA_DIR')

        self._paths = {
            'project_root': self._project_root,
            'cached_data': Path(data_dir).absolute() if data_dir else self._project_root / 'cached_data',
            'logs': self._project_root / 'logs',
        }

        self._initialized = True

    @property
    def project_root(self) -> Path:
        """Get the absolute path to the project root directory."""
        return self._paths['project_root']

    @property
    def cached_data(self) -> Path:
        """Get the absolute path to the cached_data directory."""
        return self._paths['cached_data']

    @property
    def logs(self) -> Path:
        """Get the absolute path to the logs directory."""
        return self._paths['logs']


# Global instance for easy access
paths = ProjectPaths()


def get_project_root() -> Path:
    """Get the absolute path to the project root directory."""
    return paths.project_root


def get_cached_data_dir() -> Path:
    """Get the absolute path to the cached_data directory."""
    return paths.cached_data


def get_logs_dir() -> Path:
    """Get the absolute path to the logs directory."""
    return paths.logs
