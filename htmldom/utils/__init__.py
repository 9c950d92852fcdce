"""
Utility modules for htmldom.
"""

from .config import Config
from .logging import setup_logging, log_exception

__all__ = [
    'Config',
    'setup_logging',
    'log_exception',
]
