"""
CLI module for the orderbook package.
Provides command-line interface functionality and utilities.
"""

from .base import BaseCommand
from .config import Config
from .logging import setup_logging, get_logger

__all__ = ['BaseCommand', 'Config', 'setup_logging', 'get_logger', 'cli']

def __getattr__(name):
    # main imports the commands, which import this package
    if name == 'cli':
        from .main import cli
        return cli
    raise AttributeError(name)
