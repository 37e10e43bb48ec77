"""
Configuration package for the merit fund app.
"""

from .paths import (
    ProjectPaths,
    paths,
    get_project_root,
    get_cached_data_dir,
    get_logs_dir,
)

__all__ = [
    'ProjectPaths',
    'paths',
    'get_project_root',
    'get_cached_data_dir',
    'get_logs_dir',
]
