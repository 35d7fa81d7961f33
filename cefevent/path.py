# ***** BEGIN LICENSE BLOCK *****
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this file,
# You can obtain one at http://mozilla.org/MPL/2.0/.
# ***** END LICENSE BLOCK *****
"""
Dotted name resolution used by the configuration helpers to turn strings
like ``cefevent.senders.StdOutSender`` into the objects they name.
"""
import importlib


class DottedNameResolver(object):
    """
    Resolves absolute dotted names to the object they refer to.

    Two dotted name styles are supported:

    - ``package.module:attr``, where non-module attributes are separated from
      the module path with a colon.

    - ``package.module.attr``, where the longest importable prefix is taken
      as the module and the rest is looked up as attributes.

    Relative names (starting with ``.`` or ``:``) are not supported.
    """
    def resolve(self, dotted):
        """
        Return the object named by `dotted`. Raises `ValueError` if `dotted`
        is not a string, is relative, or cannot be resolved.
        """
        if not isinstance(dotted, str):
            raise ValueError('%r is not a string' % (dotted,))
        if not dotted or dotted[0] in '.:':
            raise ValueError('relative name %r is not supported' % (dotted,))
        if ':' in dotted:
            module_name, attrs = dotted.split(':', 1)
            return self._lookup(self._import(dotted, module_name),
                                attrs.split('.'), dotted)
        return self._dotted_style(dotted)

    def maybe_resolve(self, dotted):
        """
        Like `resolve`, except non-string values are simply returned.
        """
        if isinstance(dotted, str):
            return self.resolve(dotted)
        return dotted

    def _import(self, dotted, module_name):
        try:
            return importlib.import_module(module_name)
        except ImportError as exc:
            raise ValueError('The dotted name %r cannot be imported: %s'
                             % (dotted, exc)) from exc

    def _lookup(self, found, attrs, dotted):
        for attr in attrs:
            try:
                found = getattr(found, attr)
            except AttributeError as exc:
                raise ValueError('The dotted name %r cannot be resolved'
                                 % (dotted,)) from exc
        return found

    def _dotted_style(self, dotted):
        parts = dotted.split('.')
        # try the longest importable module prefix first
        for split in range(len(parts), 0, -1):
            module_name = '.'.join(parts[:split])
            try:
                module = importlib.import_module(module_name)
            except ImportError:
                if split == 1:
                    raise ValueError('The dotted name %r cannot be imported'
                                     % (dotted,))
                continue
            return self._lookup(module, parts[split:], dotted)


def resolve_name(name):
    """Resolve dotted name into a python object.

    This function resolves a dotted name as a reference to a python object,
    returning whatever object happens to live at that path.  It's a simple
    convenience wrapper around `DottedNameResolver`.
    """
    return DottedNameResolver().resolve(name)
