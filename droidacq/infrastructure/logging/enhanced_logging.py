"""
Enhanced logging system for droidacq.

Logs to the console and to command.log inside the case folder, so the
acquisition log travels with the artifacts it describes.
"""

import atexit
import logging
import os
import platform
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class EnhancedLogger:
    """
    Console plus case-folder file logging.

    The console stays at WARNING unless verbose; the file always gets DEBUG.
    """

    def __init__(self):
        self.file_handlers: List[logging.FileHandler] = []
        self.console_handler: Optional[logging.Handler] = None
        # None until setup_logging has captured the root handlers
        self.original_handlers: Optional[List[logging.Handler]] = None
        self.original_level: Optional[int] = None
        self.log_file_path: Optional[Path] = None

        atexit.register(self.cleanup)

    def setup_logging(self, output_directory: str, log_filename: str = "command.log", verbose: bool = False) -> str:
        """
        Set up logging to both console and file.

        Args:
            output_directory: Case folder where the log file is written
            log_filename: Name of the log file
            verbose: Show INFO on the console

        Returns:
            Path to the created log file
        """
        output_dir = Path(output_directory)
        output_dir.mkdir(parents=True, exist_ok=True)
        self.log_file_path = output_dir / log_filename

        root_logger = logging.getLogger()
        self.original_handlers = root_logger.handlers[:]
        self.original_level = root_logger.level
        root_logger.handlers.clear()
        root_logger.setLevel(logging.DEBUG)

        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

        # stderr keeps stdout clean for the JSON summary
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(logging.INFO if verbose else logging.WARNING)
        root_logger.addHandler(console_handler)
        self.console_handler = console_handler

        file_handler = logging.FileHandler(self.log_file_path, mode='a', encoding='utf-8')
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.DEBUG)
        root_logger.addHandler(file_handler)
        self.file_handlers.append(file_handler)

        logger = logging.getLogger("enhanced.logging")
        logger.info(f"Log file: {self.log_file_path}")
        logger.info(f"Console logging level: {'INFO' if verbose else 'WARNING'}")

        return str(self.log_file_path)

    def log_system_info(self):
        """Log host information for troubleshooting."""
        logger = logging.getLogger("system.info")

        logger.info("=== System Information ===")
        logger.info(f"Platform: {platform.platform()}")
        logger.info(f"Python version: {platform.python_version()}")
        logger.info(f"Working directory: {os.getcwd()}")
        logger.info(f"Command line: {' '.join(sys.argv)}")
        logger.info(f"Acquisition start time: {datetime.now().isoformat()}")

    def log_acquisition_summary(self,
                                storage_path: str,
                                device: str,
                                collectors_run: int,
                                collectors_failed: int,
                                execution_time: float):
        """Log acquisition execution summary."""
        logger = logging.getLogger("acquisition.summary")

        logger.info("=== Acquisition Summary ===")
        logger.info(f"Acquisition folder: {storage_path}")
        logger.info(f"Device: {device}")
        logger.info(f"Collectors executed: {collectors_run}")
        logger.info(f"Collectors failed: {collectors_failed}")
        logger.info(f"Total execution time: {execution_time:.2f} seconds")
        logger.info(f"Acquisition completed: {datetime.now().isoformat()}")

    def log_error_details(self, error: Exception, context: str = ""):
        """Log detailed error information, including the stack trace."""
        logger = logging.getLogger("error.details")

        if context:
            logger.error(f"Context: {context}")
        logger.error(f"Error type: {type(error).__name__}")
        logger.error(f"Error message: {error}", exc_info=error)

    def create_acquisition_log_entry(self,
                                     stage: str,
                                     message: str,
                                     details: Optional[Dict[str, Any]] = None):
        """Create a structured log entry for an acquisition stage."""
        logger = logging.getLogger(f"acquisition.{stage}")

        log_message = f"[{stage.upper()}] {message}"
        if details:
            log_message += f" | Details: {details}"

        logger.info(log_message)

    def cleanup(self):
        """Close file handlers and restore the original root handlers."""
        root_logger = logging.getLogger()

        for handler in self.file_handlers:
            root_logger.removeHandler(handler)
            handler.close()
        self.file_handlers.clear()

        if self.console_handler is not None:
            root_logger.removeHandler(self.console_handler)
            self.console_handler = None

        if self.original_handlers is not None:
            root_logger.handlers[:] = self.original_handlers
            self.original_handlers = None

        if self.original_level is not None:
            root_logger.setLevel(self.original_level)
            self.original_level = None

    def finalize_logging(self, success: bool = True):
        """Finalize logging with completion status."""
        logger = logging.getLogger("enhanced.logging")

        if success:
            logger.info("Acquisition completed successfully")
        else:
            logger.error("Acquisition completed with errors")

        for handler in logging.getLogger().handlers:
            handler.flush()


# Global instance for use throughout the application
enhanced_logger = EnhancedLogger()
