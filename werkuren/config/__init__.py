"""
Configuration module for the werkuren calculator.
"""
from .settings import (
    WerkurenConfig,
    get_config,
    load_config,
    reload_config
)

__all__ = [
    'WerkurenConfig',
    'get_config',
    'load_config',
    'reload_config'
]
