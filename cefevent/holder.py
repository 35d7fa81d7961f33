# ***** BEGIN LICENSE BLOCK *****
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this file,
# You can obtain one at http://mozilla.org/MPL/2.0/.
# ***** END LICENSE BLOCK *****
"""
Process-wide registry of named CEF loggers.

Passing a `CEFLogger` explicitly to the code that needs it is preferred.
`LOGGER_HOLDER` exists for applications that want a single place to fetch a
configured logger from. The lock only guards changes to the registry; swapping
the default logger while other threads are logging through the old one is not
coordinated with those calls.
"""
from cefevent.config import logger_from_dict_config
import threading


class CEFLoggerHolder(object):
    """
    This is meant to be used as a singleton class that will hold references to
    CEFLogger instances and any required process-wide config data.
    """
    def __init__(self):
        self._loggers = dict()
        self.global_config = dict()
        self.lock = threading.Lock()  # write lock for adding loggers

    def get_logger(self, name):
        """
        Return the named CEFLogger, or None if no logger of that name has been
        stored.
        """
        return self._loggers.get(name)

    def set_logger(self, name, logger):
        """
        Store a CEFLogger under `name`. The first logger stored becomes the
        default unless a default name has already been chosen.
        """
        with self.lock:
            self._loggers[name] = logger
            if not self.global_config.get('default'):
                self.global_config['default'] = name

    def set_default_logger_name(self, name):
        """
        Convenience method for specifying what should be the default logger.
        """
        self.global_config['default'] = name

    @property
    def default_logger(self):
        """
        Return the default CEFLogger (as specified by the `default` value in
        the global_config dict), or None.
        """
        default_name = self.global_config.get('default')
        if default_name is None:
            return
        return self._loggers.get(default_name)

    def delete_logger(self, name):
        """
        Deletes the specified logger from the set of stored loggers.

        :param name: Name of the logger object to delete.
        """
        with self.lock:
            self._loggers.pop(name, None)
            if self.global_config.get('default') == name:
                del self.global_config['default']

    def clear(self):
        """Forget every stored logger and all global config."""
        with self.lock:
            self._loggers.clear()
            self.global_config = dict()


LOGGER_HOLDER = CEFLoggerHolder()


def get_logger(name, config_dict=None):
    """
    Return logger of the specified name from the LOGGER_HOLDER.

    :param name: String token identifying the CEFLogger.
    :param config_dict: Configuration dictionary. If given, the logger is
                        (re)configured from it via `logger_from_dict_config`
                        and stored under `name`, creating it if needed.

    Raises `KeyError` if no logger is stored under `name` and no
    configuration is provided.
    """
    logger = LOGGER_HOLDER.get_logger(name)
    if config_dict:
        logger = logger_from_dict_config(config_dict, logger=logger)
        LOGGER_HOLDER.set_logger(name, logger)
    elif logger is None:
        raise KeyError(name)
    return logger


def default_logger():
    """
    Return the default logger from LOGGER_HOLDER. Raises `LookupError` if
    none has been set.
    """
    logger = LOGGER_HOLDER.default_logger
    if logger is None:
        raise LookupError('no default CEF logger configured')
    return logger
