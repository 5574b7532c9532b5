from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


# PUBLIC_INTERFACE
def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging for the service.

    Records go to standard output so container runtimes collect them alongside
    uvicorn's own access log.
    """
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stdout)
