"""
Utilities package - logging and timing helpers shared by the Simon game system
"""

from .hybrid_logger import HybridLogger, ClassLogger, ColoredFormatter, default_class_logger
from .once_in_ms import OnceInMs

__all__ = [
    'HybridLogger',
    'ClassLogger',
    'ColoredFormatter',
    'default_class_logger',
    'OnceInMs'
]
