"""
Logging Configuration for the General Oblique Transformation.

Every module obtains its logger through ``get_logger(__name__)`` so that
output from the parameter resolver, the rotation formulas and the inner
projection engine shares one format.

Levels
------
- DEBUG: per-point traces before and after the inner projection
- INFO: resolved rotation mode of each projection instance
"""

import logging
import sys


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """Get a logger configured for the oblique transformation package.
    
    Parameters
    ----------
    name : str
        Logger name (typically __name__).
    level : int
        Logging level.
        
    Returns
    -------
    logging.Logger
        Configured logger instance.
    """
    logger = logging.getLogger(name)
    
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            '%(asctime)s | %(name)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    
    logger.setLevel(level)
    return logger
