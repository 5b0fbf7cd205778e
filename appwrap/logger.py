import logging
import sys

_HANDLER_NAME = "appwrap"
_QUIET_LOGGERS = ("httpx", "httpcore", "PIL")


def setup_logger(verbose: bool = False) -> None:
    """Route log records to stderr; safe to call once per CLI invocation.

    The level is applied on every call so ``--verbose`` takes effect even
    when a handler was installed earlier in the same process.
    """

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    if not any(h.get_name() == _HANDLER_NAME for h in root_logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(
            logging.Formatter(fmt="[%(levelname)s] %(name)s: %(message)s")
        )
        root_logger.addHandler(handler)

    # Third-party chatter stays at WARNING even with --verbose.
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
