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

from standin.exceptions import NotAMockError
from standin.exceptions import StandinError
from standin.recorder import _recorders
from standin.recorder import Call
from standin.recorder import Recorder
from standin.recorder import Result
from standin.recorder import RETURN
from standin.recorder import THROW
from standin.stand_in import create_mock
from standin.stand_in import MAX_DEPTH
from standin.stand_in import StandIn


logger = logging.getLogger(__name__)


def is_mock(value):
    """Tells whether value is a recorder this package can configure.

    Never raises: anything that fails to look like a recorder, including
    objects whose attribute access blows up, is simply not a mock.
    """
    if not callable(value):
        return False
    try:
        state = value.mock
        return (isinstance(state.calls, list) and
                isinstance(state.results, list))
    except Exception:
        return False


def create_mock_with_defaults(defaults=None, **kwargs):
    """Creates a stand-in with some attributes configured up front.

    Examples:
        >>> service = create_mock_with_defaults(
        ...     get_user=lambda user_id: {'id': user_id}, region='eu')
        >>> service.get_user('1')
        {'id': '1'}
        >>> service.region
        'eu'

    Args:
        - defaults: dict of attribute/value pairs
        - kwargs: more attribute/value pairs, merged over defaults

    Callable values become the persistent behavior of the matching child
    stand-in, everything else is pinned on the attribute as is.

    Returns:
        StandIn object
    """
    attrs = dict(defaults or {})
    attrs.update(kwargs)
    mock = create_mock()
    for attr, value in attrs.items():
        if callable(value):
            child = getattr(mock, attr)
            if not is_mock(child):
                raise NotAMockError(
                    '%s is not a mock, cannot install a default for it' % attr)
            child.mock_implementation(value)
        else:
            setattr(mock, attr, value)
    return mock


class CallInfo(object):
    """Summary of a recorder's logs, taken when get_call_info() was called."""

    def __init__(self, calls, results):
        self.call_count = len(calls)
        self.calls = calls
        self.results = results
        self.last_call = calls[-1] if calls else ()
        self.last_result = results[-1] if results else Result(RETURN, None)

    def __repr__(self):
        return '<CallInfo call_count=%d last_call=%r>' % (
            self.call_count, self.last_call)


def get_call_info(recorder):
    """Returns a CallInfo for a recorder or stand-in.

    Raises:
        NotAMockError if recorder is not something is_mock() accepts
    """
    if not is_mock(recorder):
        raise NotAMockError('%r is not a mock' % (recorder,))
    state = recorder.mock
    return CallInfo(state.calls, state.results)


def reset_all_mocks():
    """Resets every live recorder to its construction-time state.

    Returns:
        number of recorders reset
    """
    recorders = list(_recorders)
    for recorder in recorders:
        recorder.mock_reset()
    logger.debug('reset %d recorders', len(recorders))
    return len(recorders)


def clear_all_mocks():
    """Empties the call logs of every live recorder, keeping behaviors.

    Returns:
        number of recorders cleared
    """
    recorders = list(_recorders)
    for recorder in recorders:
        recorder.mock_clear()
    logger.debug('cleared %d recorders', len(recorders))
    return len(recorders)
