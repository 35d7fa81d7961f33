# ***** BEGIN LICENSE BLOCK *****
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this file,
# You can obtain one at http://mozilla.org/MPL/2.0/.
# ***** END LICENSE BLOCK *****
"""
Sender that routes CEF lines through Python's standard library `logging`
module, so existing handlers (syslog, rotating files, ...) do the delivery.
"""
import logging


class StdLibLoggingSender(object):
    """
    Passes each CEF line, decoded as text, to a stdlib logger at a fixed
    level.
    """
    def __init__(self, logger_name=None, level=logging.INFO):
        """
        :param logger_name: Name of logger that should be fetched from logging
                            module. The root logger is used if omitted.
        :param level: Level to log at, either a number or a level name such
                      as ``'WARNING'``.
        """
        if logger_name is None:
            self.logger = logging.getLogger()
        else:
            self.logger = logging.getLogger(logger_name)
        if isinstance(level, str):
            name, level = level, logging.getLevelName(level.upper())
            if not isinstance(level, int):
                raise ValueError('unknown logging level: %r' % (name,))
        self.level = level

    def send_message(self, msg):
        self.logger.log(self.level, msg.decode('utf-8'))
