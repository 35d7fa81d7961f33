# ***** BEGIN LICENSE BLOCK *****
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this file,
# You can obtain one at http://mozilla.org/MPL/2.0/.
# ***** END LICENSE BLOCK *****
from cefevent.severity import SEVERITY
import logging


def level_to_severity(levelno):
    """Map a stdlib logging level onto a CEF severity keyword."""
    if levelno >= logging.CRITICAL:
        return SEVERITY.VERY_HIGH
    elif levelno >= logging.ERROR:
        return SEVERITY.HIGH
    elif levelno >= logging.WARNING:
        return SEVERITY.MEDIUM
    elif levelno >= logging.DEBUG:
        return SEVERITY.LOW
    return SEVERITY.UNKNOWN


class CEFHandler(logging.Handler):
    """
    Logging handler that emits each record as a CEF event.

    The record's formatted message becomes the event name. The device event
    class id is taken from a ``cef_signature`` attribute (pass it through
    ``extra=``) and falls back to the logger name; a ``cef_extensions``
    attribute, either an `Extensions` or a plain mapping, supplies the
    extension fields.
    """
    def __init__(self, cef_logger, level=logging.NOTSET):
        logging.Handler.__init__(self, level)
        self.cef_logger = cef_logger

    def emit(self, record):
        try:
            signature = getattr(record, 'cef_signature', None) or record.name
            self.cef_logger.log(signature, record.getMessage(),
                                level_to_severity(record.levelno),
                                getattr(record, 'cef_extensions', None))
        except Exception:
            self.handleError(record)


def hook_logger(logger_name, cef_logger):
    """
    Used to hook cefevent into the Python stdlib logging framework. Registers a
    logging module handler that delegates to a CEFLogger for actual event
    delivery.

    :param logger_name: Name of the stdlib logging `logger` object for which
                        the handler should be registered.
    :param cef_logger: CEFLogger instance that the registered handler will use
                       for actual event delivery.
    """
    logger = logging.getLogger(logger_name)
    # first check to see if we're already registered
    for existing in logger.handlers:
        if (isinstance(existing, CEFHandler) and
                existing.cef_logger is cef_logger):
            # already done, do nothing
            return existing
    handler = CEFHandler(cef_logger)
    logger.addHandler(handler)
    return handler
