import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Stdout logger; level comes from PAGE_RAG_LOG_LEVEL (default INFO)."""
    logger = logging.getLogger(name or "page_rag")
    if logger.handlers:
        return logger
    logger.setLevel(os.getenv("PAGE_RAG_LOG_LEVEL", "INFO").upper())

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
