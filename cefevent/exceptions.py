# ***** BEGIN LICENSE BLOCK *****
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this file,
# You can obtain one at http://mozilla.org/MPL/2.0/.
# ***** END LICENSE BLOCK *****
"""
Exceptions raised by cefevent. Nothing in the package retries or swallows
these, every failure is handed back to the caller of the emitting call.
"""


class CEFError(Exception):
    """Base class for all cefevent errors."""


class InvalidCefVersionError(CEFError, ValueError):
    """CEF version other than 0 or 1 was requested."""

    def __init__(self, version):
        self.version = version
        CEFError.__init__(self, 'invalid cef version: %r' % (version,))


class InvalidSeverityError(CEFError, ValueError):
    """
    Severity is neither a known keyword nor an integer between 0 and 10.
    """

    def __init__(self, severity):
        self.severity = severity
        CEFError.__init__(self, 'invalid severity: %r' % (severity,))


class _WrappedError(CEFError):
    prefix = ''

    def __init__(self, cause):
        self.cause = cause
        CEFError.__init__(self, '%s: %s' % (self.prefix, cause))


class HostnameUnavailableError(_WrappedError):
    """The hostname source failed while building the syslog header."""
    prefix = 'failed to get hostname'


class SinkWriteError(_WrappedError):
    """The sender failed to accept a finished CEF line."""
    prefix = 'failed to write log'


class EnvironmentNotFoundError(CEFError, KeyError):
    """A ${VAR} reference in a config file names an unset variable."""

    def __init__(self, varname):
        self.varname = varname
        CEFError.__init__(self, varname)

    def __str__(self):
        return 'environment variable not found: %s' % self.varname
