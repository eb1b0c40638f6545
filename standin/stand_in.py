"""Copyright 2011 Herman Sheremetyev. All rights reserved.

Redistribution and use in source and binary forms, with or without
modification, are permitted provided that the following conditions are met:

   1. Redistributions of source code must retain the above copyright notice,
   this list of conditions and the following disclaimer.

   2. Redistributions in binary form must reproduce the above copyright notice,
   this list of conditions and the following disclaimer in the documentation
   and/or other materials provided with the distribution.

THIS SOFTWARE IS PROVIDED BY THE AUTHOR ``AS IS'' AND ANY EXPRESS OR IMPLIED
WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE IMPLIED WARRANTIES OF
MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO
EVENT SHALL THE AUTHOR OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT,
INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT
LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR
PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE
OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE, EVEN IF
ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.  """


import logging

from standin.recorder import Recorder


logger = logging.getLogger(__name__)

MAX_DEPTH = 10

# Attribute names handed straight to the recorder instead of being mocked.
MOCK_ATTRS = frozenset([
    'mock',
    'mock_implementation',
    'mock_implementation_once',
    'mock_return_value',
    'mock_return_value_once',
    'mock_resolved_value',
    'mock_resolved_value_once',
    'mock_rejected_value',
    'mock_rejected_value_once',
    'mock_clear',
    'mock_reset',
    'mock_restore',
])


def _getattr(obj, name):
    """Convenience wrapper."""
    return object.__getattribute__(obj, name)


def _is_dunder(name):
    return len(name) > 4 and name.startswith('__') and name.endswith('__')


def create_mock(name='mock', depth=0):
    """Creates a stand-in that mocks every attribute and call, recursively.

    Examples:
        >>> service = create_mock('service')
        >>> user = service.get_user('1')
        >>> service.get_user.mock.calls
        [call("1")]
        >>> user.profile is user.profile
        True

    Args:
        - name: label used in reprs of this node and its descendants
        - depth: distance from the root, nodes deeper than MAX_DEPTH are None

    Returns:
        StandIn object, or None once the depth limit is exceeded
    """
    if depth > MAX_DEPTH:
        logger.debug('depth limit %d exceeded, %s is None', MAX_DEPTH, name)
        return None
    return StandIn(name, depth)


class StandIn(object):
    """Callable object whose unknown attributes are stand-ins themselves.

    Calls go to a Recorder that by default returns a fresh stand-in one level
    deeper. Attribute reads create a child stand-in on first access and return
    the same child afterwards. Assigning an attribute pins that value instead.
    """

    def __init__(self, name='mock', depth=0):
        object.__setattr__(self, '_StandIn__name', name)
        object.__setattr__(self, '_StandIn__depth', depth)
        object.__setattr__(self, '_StandIn__children', {})
        object.__setattr__(self, '_StandIn__configurators', {})
        object.__setattr__(
            self, '_StandIn__recorder',
            Recorder(lambda *kargs, **kwargs: create_mock(
                '%s()' % name, depth + 1)))

    def __call__(self, *kargs, **kwargs):
        return _getattr(self, '_StandIn__recorder')(*kargs, **kwargs)

    def __getattr__(self, name):
        children = _getattr(self, '_StandIn__children')
        if name in children:
            return children[name]
        if name in MOCK_ATTRS:
            return self.__passthrough(name)
        if _is_dunder(name):
            raise AttributeError(name)
        children[name] = create_mock(
            '%s.%s' % (_getattr(self, '_StandIn__name'), name),
            _getattr(self, '_StandIn__depth') + 1)
        return children[name]

    def __setattr__(self, name, value):
        _getattr(self, '_StandIn__children')[name] = value

    def __delattr__(self, name):
        children = _getattr(self, '_StandIn__children')
        if name not in children:
            raise AttributeError(name)
        del children[name]

    def __dir__(self):
        return list(_getattr(self, '_StandIn__children'))

    def __await__(self):
        return self
        yield

    def __repr__(self):
        return '<StandIn %s>' % _getattr(self, '_StandIn__name')

    def __passthrough(self, name):
        recorder = _getattr(self, '_StandIn__recorder')
        attr = getattr(recorder, name)
        if not callable(attr):
            return attr
        configurators = _getattr(self, '_StandIn__configurators')
        if name in configurators:
            return configurators[name]

        def configure(*kargs, **kwargs):
            ret = attr(*kargs, **kwargs)
            if ret is recorder:
                return self
            return ret
        configure.__name__ = name
        configure.__doc__ = attr.__doc__
        configurators[name] = configure
        return configure
