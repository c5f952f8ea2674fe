"""
Process-wide logging.

Modules log through ``logging.getLogger(__name__)``; the root handlers render
every record through structlog's ProcessorFormatter:

- file handler: one JSON object per line (the service log)
- console handler: human readable, for the terminal running the server
"""

import logging
import sys
from pathlib import Path

import structlog

_SHARED_PROCESSORS = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt='iso', utc=True),
]


def configure_logging(log_file='logs.txt', level='INFO', console=True):
    """
    Attach the file and console handlers to the root logger.

    Opening ``log_file`` happens here, so an unwritable destination raises
    before the application is built. Calling this again replaces the handlers.
    """
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(str(log_path), mode='a', encoding='utf-8')
    file_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_SHARED_PROCESSORS,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ],
        )
    )

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        if isinstance(handler, logging.FileHandler):
            handler.close()
    root.setLevel(level)
    root.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                foreign_pre_chain=_SHARED_PROCESSORS,
                processors=[
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    structlog.dev.ConsoleRenderer(colors=False),
                ],
            )
        )
        root.addHandler(console_handler)

    logging.getLogger('werkzeug').setLevel(logging.WARNING)
    return file_handler
