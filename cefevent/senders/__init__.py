# ***** BEGIN LICENSE BLOCK *****
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this file,
# You can obtain one at http://mozilla.org/MPL/2.0/.
# ***** END LICENSE BLOCK *****
"""
Senders receive each finished CEF line as UTF-8 `bytes` through a single
`send_message` call. Framing (newlines, length prefixes) is the sender's
business; any exception a sender raises is wrapped by the logger in a
`SinkWriteError` and never retried.
"""
from cefevent.senders.dev import FileSender  # NOQA
from cefevent.senders.dev import StdOutSender  # NOQA
from cefevent.senders.dev import StreamSender  # NOQA
from cefevent.senders.dev import DebugCaptureSender  # NOQA
from cefevent.senders.logging import StdLibLoggingSender  # NOQA


class NoSendSender(object):
    """
    A non-working sender, primarily used as a placeholder between the time a
    CEFLogger is created and a working sender object is provided.
    """
    def send_message(self, msg):
        """
        Raises NotImplementedError.
        """
        raise NotImplementedError('no sender configured')
