"""
Enhanced logging infrastructure for droidacq.

Logs to the console and to the acquisition's command.log.
"""

from .enhanced_logging import EnhancedLogger, enhanced_logger

__all__ = [
    'EnhancedLogger',
    'enhanced_logger'
]
