import logging
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

def get_logger(name: str, level: Optional[Union[int, str]] = None) -> logging.Logger:
    """Logger with a console handler; level may be a name such as "DEBUG" from config"""
    logger = logging.getLogger(name)
    
    # Leave loggers alone once the root logger has been configured
    if not logger.handlers and not logging.getLogger().handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    if isinstance(level, int):
        logger.setLevel(level)
    elif not logger.level:
        logger.setLevel(logging.INFO)
    
    return logger
