#!/usr/bin/env python
"""Script to run the Task Tracker API server."""
import logging
import sys
from pathlib import Path

# Make the package importable when run from a checkout
sys.path.insert(0, str(Path(__file__).resolve().parent))

import uvicorn

from task_tracker.config import HOST, LOG_LEVEL, PORT
from task_tracker.logging_setup import setup_logging

logger = logging.getLogger("task_tracker.server")

if __name__ == "__main__":
    setup_logging(LOG_LEVEL)
    logger.info("Starting server on port %s", PORT)
    uvicorn.run(
        "task_tracker.main:app",
        host=HOST,
        port=PORT,
        log_config=None,
    )
