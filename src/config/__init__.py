"""
Configuration module for the payroll engine.
"""
from .settings import (
    PayrollConfig,
    get_config,
    load_config,
    reload_config
)

__all__ = [
    'PayrollConfig',
    'get_config',
    'load_config',
    'reload_config'
]
