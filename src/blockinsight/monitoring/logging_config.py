# File: src/blockinsight/monitoring/logging_config.py

import logging
import logging.handlers
import os

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
FILE_HANDLER_NAME = 'blockinsight.file'
CONSOLE_HANDLER_NAME = 'blockinsight.console'


class LogConfig:
    """
    Root logging for the API server.

    One rotating file handler captures everything down to DEBUG, the console
    handler follows the configured level. Calling setup_logging() again
    replaces both handlers rather than stacking new ones.
    """

    log_file_name = 'blockinsight.log'

    def __init__(
        self,
        log_dir: str = "logs",
        level: str = "INFO",
        max_size: int = 10 * 1024 * 1024,
        backup_count: int = 5
    ):
        self.log_dir = log_dir
        self.level = getattr(logging, str(level).upper(), logging.INFO)
        self.max_size = max_size
        self.backup_count = backup_count

    @classmethod
    def from_config(cls, config) -> 'LogConfig':
        return cls(
            log_dir=config.get('monitoring.log_dir', 'logs'),
            level=config.get('monitoring.log_level', 'INFO')
        )

    @property
    def log_file(self) -> str:
        return os.path.join(self.log_dir, self.log_file_name)

    def setup_logging(self) -> str:
        os.makedirs(self.log_dir, exist_ok=True)
        root_logger = logging.getLogger()
        for handler in root_logger.handlers[:]:
            if handler.get_name() in (FILE_HANDLER_NAME, CONSOLE_HANDLER_NAME):
                root_logger.removeHandler(handler)
                handler.close()

        file_handler = logging.handlers.RotatingFileHandler(
            self.log_file,
            maxBytes=self.max_size,
            backupCount=self.backup_count,
            encoding='utf-8'
        )
        file_handler.set_name(FILE_HANDLER_NAME)
        file_handler.setLevel(logging.DEBUG)

        console_handler = logging.StreamHandler()
        console_handler.set_name(CONSOLE_HANDLER_NAME)
        console_handler.setLevel(self.level)

        formatter = logging.Formatter(LOG_FORMAT)
        for handler in (file_handler, console_handler):
            handler.setFormatter(formatter)
            root_logger.addHandler(handler)
        root_logger.setLevel(logging.DEBUG)
        return self.log_file
