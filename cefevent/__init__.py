# ***** BEGIN LICENSE BLOCK *****
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this file,
# You can obtain one at http://mozilla.org/MPL/2.0/.
# ***** END LICENSE BLOCK *****
from cefevent.client import CEFLogger  # NOQA
from cefevent.escape import escape_extension_field  # NOQA
from cefevent.escape import escape_header_field  # NOQA
from cefevent.exceptions import CEFError  # NOQA
from cefevent.exceptions import HostnameUnavailableError  # NOQA
from cefevent.exceptions import InvalidCefVersionError  # NOQA
from cefevent.exceptions import InvalidSeverityError  # NOQA
from cefevent.exceptions import SinkWriteError  # NOQA
from cefevent.extensions import Extensions  # NOQA
from cefevent.severity import SEVERITY, validate_severity  # NOQA

__version__ = '0.1.0'
