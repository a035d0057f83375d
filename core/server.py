# core/server.py
import logging
import os
import signal
from types import FrameType
from typing import Optional

import uvicorn

from core.logging import logger


class ExitOnSignalServer(uvicorn.Server):
    """uvicorn server that exits on SIGINT/SIGTERM without draining connections."""

    def handle_exit(self, sig: int, frame: Optional[FrameType]) -> None:
        logger.info("Shutdown signal received, exiting", signal=signal.Signals(sig).name)
        for handler in logging.getLogger().handlers:
            handler.flush()
        os._exit(0)
