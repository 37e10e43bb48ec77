import os
import logging.config
from pathlib import Path


def setup_logging(logs_dir: Path, config_name: str = 'default') -> None:
    """Configure logging based on the environment."""

    # Create logs directory if it doesn't exist
    os.makedirs(logs_dir, exist_ok=True)

    # Common logging settings
    common_settings = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'standard': {
                'format': '%(message)s'
            },
            'detailed': {
                'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
            }
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'level': 'INFO',
                'formatter': 'standard',
                'stream': 'ext://sys.stdout'
            },
            'file': {
                'class': 'logging.handlers.RotatingFileHandler',
                'level': 'INFO',
                'formatter': 'detailed',
                'filename': os.path.join(logs_dir, 'app.log'),
                'maxBytes': 1048576,  # 1MB
                'backupCount': 3,
                'encoding': 'utf-8'
            },
            'error_file': {
                'class': 'logging.handlers.RotatingFileHandler',
                'level': 'ERROR',
                'formatter': 'detailed',
                'filename': os.path.join(logs_dir, 'error.log'),
                'maxBytes': 1048576,  # 1MB
                'backupCount': 3,
                'encoding': 'utf-8'
            }
        },
        'loggers': {
            '': {  # Root logger
                'handlers': ['console', 'file', 'error_file'],
                'level': 'INFO',
                'propagate': True
            },
            'merit_fund': {  # Application logger
                'handlers': ['console', 'file', 'error_file'],
                'level': 'INFO',
                'propagate': False
            },
            # Disable noisy loggers
            'werkzeug': {'level': 'WARNING'},
            'urllib3': {'level': 'WARNING'}
        }
    }

    # Environment-specific settings
    env_settings = {
        'development': {
            'loggers': {
                '': {'level': 'INFO'},
                'merit_fund': {'level': 'DEBUG'}
            },
            'handlers': {
                'console': {'level': 'INFO'},
                'file': {'level': 'DEBUG'}
            }
        },
        'testing': {
            'loggers': {
                '': {'level': 'WARNING'},
                # Let pytest's caplog see application records
                'merit_fund': {'level': 'DEBUG', 'handlers': ['file'], 'propagate': True}
            },
            'handlers': {
                'console': {'level': 'WARNING'},
                'file': {'level': 'DEBUG', 'filename': os.path.join(logs_dir, 'test.log')}
            }
        },
        'production': {
            'loggers': {
                '': {'level': 'WARNING'},
                'merit_fund': {'level': 'INFO'}
            },
            'handlers': {
                'console': {'level': 'WARNING'},
                'file': {
                    'level': 'INFO',
                    'maxBytes': 5242880,  # 5MB
                    'backupCount': 5
                },
                'error_file': {
                    'maxBytes': 5242880,  # 5MB
                    'backupCount': 5
                }
            }
        }
    }

    # Update settings based on environment
    if config_name in env_settings:
        env_config = env_settings[config_name]
        for logger_name, logger_config in env_config['loggers'].items():
            common_settings['loggers'][logger_name].update(logger_config)
        for handler_name, handler_config in env_config['handlers'].items():
            common_settings['handlers'][handler_name].update(handler_config)

    # Configure logging
    logging.config.dictConfig(common_settings)

    # Log startup message
    logger = logging.getLogger(__name__)
    logger.info(f"Starting application in {config_name} mode")
