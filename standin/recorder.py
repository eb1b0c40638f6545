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


import collections
import weakref

from standin.helpers import _arg_to_str
from standin.helpers import _format_args
from standin.helpers import rejected
from standin.helpers import resolved


RETURN = 'return'
THROW = 'throw'

# Weak registry of every live recorder, walked by reset_all_mocks().
_recorders = weakref.WeakSet()


class Call(tuple):
    """Positional arguments of one invocation, with keyword arguments attached.

    Compares equal to a plain tuple or list of the same positional arguments
    as long as no keyword arguments were passed.
    """

    def __new__(cls, kargs=(), kwargs=None):
        call = tuple.__new__(cls, kargs)
        call.kwargs = dict(kwargs or {})
        return call

    def __eq__(self, other):
        if isinstance(other, Call):
            return (tuple.__eq__(self, other) is True and
                    self.kwargs == other.kwargs)
        if isinstance(other, list):
            other = tuple(other)
        if isinstance(other, tuple):
            return not self.kwargs and tuple.__eq__(self, other) is True
        return NotImplemented

    def __ne__(self, other):
        equal = self.__eq__(other)
        if equal is NotImplemented:
            return equal
        return not equal

    __hash__ = tuple.__hash__

    def __repr__(self):
        return _format_args('call', self, self.kwargs)


class Result(object):
    """Outcome of one invocation: a returned value or a raised exception."""

    def __init__(self, type=RETURN, value=None):
        self.type = type
        self.value = value

    def __eq__(self, other):
        if not isinstance(other, Result):
            return NotImplemented
        return self.type == other.type and self.value == other.value

    def __ne__(self, other):
        equal = self.__eq__(other)
        if equal is NotImplemented:
            return equal
        return not equal

    __hash__ = None

    def __str__(self):
        if self.type == THROW:
            return 'raised %r' % (self.value,)
        return 'returned %s' % _arg_to_str(self.value)

    def __repr__(self):
        return 'Result(%r, %r)' % (self.type, self.value)


class MockState(object):
    """The call and outcome logs of a recorder."""

    def __init__(self):
        self.calls = []
        self.results = []


class Recorder(object):
    """A callable that records its invocations and runs configurable behaviors.

    Each invocation runs the first one-shot behavior in the queue, if there is
    one, otherwise the persistent behavior, otherwise returns None. The
    arguments and the outcome are logged together once the behavior finishes.

    Examples:
        >>> fetch = Recorder().mock_return_value_once(1).mock_return_value(2)
        >>> fetch(), fetch(), fetch()
        (1, 2, 2)
        >>> fetch.mock.calls
        [call(), call(), call()]
    """

    def __init__(self, implementation=None):
        """Recorder constructor.

        Args:
            - implementation: default behavior, restored by mock_reset()
        """
        self._default = implementation
        self._implementation = implementation
        self._once = collections.deque()
        self.mock = MockState()
        _recorders.add(self)

    def __call__(self, *kargs, **kwargs):
        if self._once:
            behavior = self._once.popleft()
        else:
            behavior = self._implementation
        mock = self.mock
        try:
            if behavior is None:
                value = None
            else:
                value = behavior(*kargs, **kwargs)
        except BaseException as e:
            mock.calls.append(Call(kargs, kwargs))
            mock.results.append(Result(THROW, e))
            raise
        mock.calls.append(Call(kargs, kwargs))
        mock.results.append(Result(RETURN, value))
        return value

    def __repr__(self):
        return '<Recorder called %d times>' % len(self.mock.calls)

    def mock_implementation(self, function):
        """Replaces the persistent behavior.

        Args:
            - function: callable invoked with the call's arguments

        Returns:
            - self, i.e. can be chained with other configuration methods
        """
        self._implementation = function
        return self

    def mock_implementation_once(self, function):
        """Queues a behavior used for exactly one upcoming call.

        Queued behaviors are consumed in the order they were added, ahead of
        the persistent behavior.

        Returns:
            - self, i.e. can be chained with other configuration methods
        """
        self._once.append(function)
        return self

    def mock_return_value(self, value):
        return self.mock_implementation(lambda *kargs, **kwargs: value)

    def mock_return_value_once(self, value):
        return self.mock_implementation_once(lambda *kargs, **kwargs: value)

    def mock_resolved_value(self, value):
        """Makes every call return an awaitable that evaluates to value."""
        return self.mock_implementation(
            lambda *kargs, **kwargs: resolved(value))

    def mock_resolved_value_once(self, value):
        return self.mock_implementation_once(
            lambda *kargs, **kwargs: resolved(value))

    def mock_rejected_value(self, error):
        """Makes every call return an awaitable that raises error."""
        return self.mock_implementation(
            lambda *kargs, **kwargs: rejected(error))

    def mock_rejected_value_once(self, error):
        return self.mock_implementation_once(
            lambda *kargs, **kwargs: rejected(error))

    def mock_clear(self):
        """Forgets recorded calls and results, keeping configured behaviors."""
        self.mock.calls = []
        self.mock.results = []
        return self

    def mock_reset(self):
        """Forgets calls and behaviors, back to how the recorder was built."""
        self.mock_clear()
        self._implementation = self._default
        self._once.clear()
        return self

    # nothing was replaced, so restoring is the same as resetting
    mock_restore = mock_reset
