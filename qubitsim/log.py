import logging
import sys
import os
import threading

_RECORD_COUNTER = 0
_RECORD_COUNTER_LOCK = threading.Lock()

ROOT_LOGGER_NAME = "qubitsim"
LOG_FORMAT = "[%(call_order)d] %(message)s - %(filename)s - %(funcName)s()"

ROOT_LOGGER, FILE_HANDLER, STREAM_HANDLER = None, None, None


class CallOrderFilter(logging.Filter):
    """Filter that adds a sequential call_order attribute to each log record."""
    def filter(self, record):
        global _RECORD_COUNTER
        with _RECORD_COUNTER_LOCK:
            _RECORD_COUNTER += 1
            record.call_order = _RECORD_COUNTER
        return True


def setup_root_logger():
    """Configure the handlers and the call-order filter on the qubitsim root logger.

    Handlers are chosen from the environment:
      - ``QUBITSIM_LOG_FILE=<path>`` writes every record to that file (truncated at startup)
      - ``LOG_TO_CONSOLE=true`` echoes every record to stdout
    With neither set a NullHandler keeps the library silent.
    """
    global ROOT_LOGGER, FILE_HANDLER, STREAM_HANDLER
    if ROOT_LOGGER is not None:
        return ROOT_LOGGER

    ROOT_LOGGER = logging.getLogger(ROOT_LOGGER_NAME)
    ROOT_LOGGER.setLevel(logging.DEBUG)
    ROOT_LOGGER.propagate = False

    call_filter = CallOrderFilter()
    formatter = logging.Formatter(LOG_FORMAT)

    log_file = os.getenv("QUBITSIM_LOG_FILE")
    if log_file:
        FILE_HANDLER = logging.FileHandler(log_file, mode="w")
        FILE_HANDLER.setLevel(logging.DEBUG)
        FILE_HANDLER.addFilter(call_filter)
        FILE_HANDLER.setFormatter(formatter)
        ROOT_LOGGER.addHandler(FILE_HANDLER)

    if os.getenv("LOG_TO_CONSOLE", "false").lower() == "true":
        STREAM_HANDLER = logging.StreamHandler(sys.stdout)
        STREAM_HANDLER.setLevel(logging.DEBUG)
        STREAM_HANDLER.addFilter(call_filter)
        STREAM_HANDLER.setFormatter(formatter)
        ROOT_LOGGER.addHandler(STREAM_HANDLER)

    if not ROOT_LOGGER.handlers:
        ROOT_LOGGER.addHandler(logging.NullHandler())

    return ROOT_LOGGER


def add_console_handler(level=logging.DEBUG):
    """Attach a stdout handler using the package format. Returns the handler."""
    root = setup_root_logger()
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.addFilter(CallOrderFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    return handler


def get_logger(name=""):
    """
    Returns either:
      - the root 'qubitsim' logger, if name=="" or "qubitsim"
      - or a child logger below it
    """
    root = setup_root_logger()
    if name in ("", ROOT_LOGGER_NAME):
        return root
    if not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    lg = logging.getLogger(name)
    lg.setLevel(logging.DEBUG)
    # records travel up to the root, where the handlers live
    lg.propagate = True
    return lg


def reset_call_order():
    """Zero out the counter so the next log will be [1]."""
    global _RECORD_COUNTER
    with _RECORD_COUNTER_LOCK:
        _RECORD_COUNTER = 0
