# ***** BEGIN LICENSE BLOCK *****
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this file,
# You can obtain one at http://mozilla.org/MPL/2.0/.
# ***** END LICENSE BLOCK *****
"""
This module provides helpers to handle CEFLogger configuration details.
"""
from cefevent.client import CEFLogger, check_cef_version
from cefevent.exceptions import EnvironmentNotFoundError
from cefevent.path import DottedNameResolver
from textwrap import dedent
import configparser
import copy
import io
import os
import re

_IS_INTEGER = re.compile(r'^-?[0-9].*')
_IS_ENV_VAR = re.compile(r'\$\{(\w.*)?\}')

# header identity strings are written as given, never turned into ints or bools
_RAW_OPTIONS = ('vendor', 'product', 'device_version')


def _get_env_val(match_obj):
    var = match_obj.groups()[0]
    if var not in os.environ:
        raise EnvironmentNotFoundError(var)
    return os.environ[var]


def _expand_env(value):
    """Only resolve a ${ENV_VAR} reference, leaving any other text as is."""
    value = value.strip()
    match_obj = _IS_ENV_VAR.match(value)
    if match_obj:
        return _get_env_val(match_obj)
    return value


def _convert(value):
    """Converts a config value. Numeric integer strings are converted to
    integer values.  'True-ish' string values are converted to boolean True,
    'False-ish' to boolean False. Any alphanumeric (plus underscore) value
    enclosed within ${dollar_sign_curly_braces} is assumed to represent an
    environment variable, and will be converted to the corresponding value
    provided by os.environ.
    """
    def do_convert(value):
        if not isinstance(value, str):
            # we only convert strings
            return value

        value = value.strip()
        if _IS_INTEGER.match(value):
            try:
                return int(value)
            except ValueError:
                pass
        elif value.lower() in ('true', 't', 'on', 'yes'):
            return True
        elif value.lower() in ('false', 'f', 'off', 'no'):
            return False
        match_obj = _IS_ENV_VAR.match(value)
        if match_obj:
            return _get_env_val(match_obj)
        return value

    if isinstance(value, str) and '\n' in value:
        return [line for line in [do_convert(line)
                                  for line in value.split('\n')]
                if line.strip() != '']

    return do_convert(value)


def nest_prefixes(config_dict, prefixes=None, separator="_"):
    """
    Iterates through the `config_dict` keys, looking for any starting w/ one of
    a specific set of prefixes, moving those into a single nested dictionary
    keyed by the prefix value.

    :param config_dict: Dictionary to mutate. Will also be returned.
    :param prefixes: Sequence of prefixes to look for in `config_dict` keys.
    :param separator: String which separates prefix values from the rest of the
                      key.
    """
    if prefixes is None:
        prefixes = ['sender', 'global']
    for prefix in prefixes:
        prefix_dict = {}
        full_prefix = prefix + separator
        for key in list(config_dict.keys()):
            if key.startswith(full_prefix):
                nested_key = key[len(full_prefix):]
                prefix_dict[nested_key] = config_dict.pop(key)
        if prefix_dict:
            if prefix in config_dict:
                config_dict[prefix].update(prefix_dict)
            else:
                config_dict[prefix] = prefix_dict
    return config_dict


def logger_from_dict_config(config, logger=None, clear_global=False):
    """
    Configure a CEF logger, fully configured w/ sender.

    :param config: Configuration dictionary.
    :param logger: CEFLogger instance to configure. If None, one will be
                   created.
    :param clear_global: If True, delete any existing global config on the
                         LOGGER_HOLDER before applying new config.

    The configuration dict supports the following values:

    vendor, product, device_version
      Device identity written into every CEF header. Values are converted to
      strings, so ``device_version = 1`` in an INI file is fine.
    cef_version
      CEF format version, 0 or 1 (default 1). Anything else raises
      `InvalidCefVersionError` before a sender is created.
    syslog_header
      Whether to prefix lines with a syslog timestamp and hostname (default
      True).
    strict
      Validate the severity of every event before emitting (default False).
    clock
      Dotted name of a callable returning the current `datetime`.
    hostname
      Dotted name of a callable returning the local hostname.
    sender
      Nested dictionary containing sender configuration.
    global
      Dictionary to be applied to LOGGER_HOLDER's `global_config` storage.
      New config will overwrite any conflicting values, but will not delete
      other config entries. To delete, calling code should call the function
      with `clear_global` set to True.

    Failure to include a sender results in a logger whose every `log` call
    fails with `SinkWriteError`. Any unrecognized keys will be ignored.

    Note that any top level config values starting with `sender_` will be added
    to the `sender` config dictionary, overwriting any values that may already
    be set.

    The sender configuration supports the following values:

    class (required)
      Dotted name identifying the sender class to instantiate.
    args
      Sequence of non-keyword args to pass to sender constructor.
    <kwargs>
      All remaining key-value pairs in the sender config dict will be passed as
      keyword arguments to the sender constructor.
    """
    # Make a deep copy of the configuration so that subsequent uses of
    # the config won't blow up
    config = nest_prefixes(copy.deepcopy(config))

    cef_version = config.get('cef_version', 1)
    check_cef_version(cef_version)

    sender_config = config.get('sender', {})
    vendor = str(config.get('vendor', ''))
    product = str(config.get('product', ''))
    device_version = str(config.get('device_version', ''))
    syslog_header = config.get('syslog_header', True)
    strict = config.get('strict', False)
    global_conf = config.get('global', {})

    # update global config stored in LOGGER_HOLDER
    from cefevent.holder import LOGGER_HOLDER
    if clear_global:
        LOGGER_HOLDER.global_config = {}
    LOGGER_HOLDER.global_config.update(global_conf)

    resolver = DottedNameResolver()
    clock = resolver.maybe_resolve(config.get('clock'))
    hostname_source = resolver.maybe_resolve(config.get('hostname'))

    # instantiate sender
    sender = None
    if sender_config:
        sender_clsname = sender_config.pop('class')
        sender_cls = resolver.resolve(sender_clsname)
        sender_args = sender_config.pop('args', tuple())
        if isinstance(sender_args, (str, int)):
            sender_args = (sender_args,)
        sender = sender_cls(*sender_args, **sender_config)

    # instantiate and/or configure logger
    if logger is None:
        logger = CEFLogger(sender, vendor, product, device_version,
                           cef_version=cef_version,
                           syslog_header=syslog_header, strict=strict,
                           clock=clock, hostname_source=hostname_source)
    else:
        logger.setup(sender, vendor, product, device_version,
                     cef_version=cef_version, syslog_header=syslog_header,
                     strict=strict, clock=clock,
                     hostname_source=hostname_source)
    return logger


def dict_from_stream_config(stream, section):
    """
    Parses configuration from a stream and converts it to a dictionary suitable
    for passing to `logger_from_dict_config`.

    :param stream: Stream object containing config information.
    :param section: INI file section containing the configuration we care
                    about.
    """
    config = configparser.ConfigParser(interpolation=None)
    config.read_file(stream)
    logger_dict = {}

    for opt in config.options(section):
        value = config.get(section, opt)
        if opt in _RAW_OPTIONS:
            logger_dict[opt] = _expand_env(value)
        else:
            logger_dict[opt] = _convert(value)

    logger_dict = nest_prefixes(logger_dict)
    return logger_dict


def logger_from_stream_config(stream, section, logger=None,
                              clear_global=False):
    """
    Extract configuration data in INI format from a stream object (e.g. a file
    object) and use it to generate a CEF logger. Config values will be sent
    through the `_convert` function for possible type conversion.

    :param stream: Stream object containing config information.
    :param section: INI file section containing the configuration we care
                    about.
    :param logger: CEFLogger instance to configure. If None, one will be
                   created.

    Note that all sender config options should be prefaced by "sender_", e.g.
    "sender_class" should specify the dotted name of the sender class to use.
    Any values prefaced by "global_" will be added to the global config
    dictionary.
    """
    logger_dict = dict_from_stream_config(stream, section)
    return logger_from_dict_config(logger_dict, logger, clear_global)


def logger_from_text_config(text, section, logger=None, clear_global=False):
    """
    Extract configuration data in INI format from provided text and use it to
    configure a CEF logger. Text is converted to a stream and passed on to
    `logger_from_stream_config`.

    :param text: INI text containing config information.
    :param section: INI file section containing the configuration we care
                    about.
    :param logger: CEFLogger instance to configure. If None, one will be
                   created.
    """
    stream = io.StringIO(dedent(text))
    return logger_from_stream_config(stream, section, logger, clear_global)
