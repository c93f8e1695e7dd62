import logging
import os
import sys

from pythonjsonlogger import jsonlogger

SERVICE_NAME = "video-transcriber"

_configured = False


def setup_logging() -> logging.Logger:
    """
    Configures structured JSON logging on stdout and returns the root logger.

    Records carry timestamp, level, logger name, message and the ddtrace
    trace_id/span_id, plus a static service field. The level comes from
    LOG_LEVEL (default INFO). Safe to call from every module; handlers are
    installed once.
    """
    global _configured

    root_logger = logging.getLogger()
    if _configured:
        return root_logger

    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s",
        static_fields={"service": SERVICE_NAME},
    )
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)

    root_logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())
    root_logger.handlers = [stream_handler]

    # pika logs every connection event at INFO
    logging.getLogger("pika").setLevel(logging.WARNING)

    _configured = True
    return root_logger
