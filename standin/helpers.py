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


import inspect
import re


def _arg_to_str(arg):
    if isinstance(arg, re.Pattern):
        return '/%s/' % arg.pattern
    if isinstance(arg, tuple):
        args = ', '.join([_arg_to_str(a) for a in arg])
        return '(' + args + ')'
    if isinstance(arg, str):
        return '"%s"' % arg
    else:
        return '%s' % arg


def _format_args(name, kargs, kwargs=None):
    kargs = ', '.join(_arg_to_str(arg) for arg in kargs)
    kwargs = ', '.join(
        '%s=%s' %
        (k, _arg_to_str(v)) for k, v in (kwargs or {}).items())
    if kargs and kwargs:
        args = '%s, %s' % (kargs, kwargs)
    else:
        args = '%s%s' % (kargs, kwargs)
    return '%s(%s)' % (name, args)


class Settled(object):
    """An awaitable whose outcome is already decided.

    Awaiting it either evaluates to value or raises the stored exception.
    Nothing is scheduled on creation, so it can be built outside of a running
    event loop and awaited any number of times.
    """

    def __init__(self, value=None, raises=None, rejected=False):
        self.value = value
        self.raises = raises
        self.rejected = rejected or raises is not None

    def __repr__(self):
        if self.rejected:
            return '<Settled raises %s>' % _arg_to_str(self.raises)
        return '<Settled %s>' % _arg_to_str(self.value)

    def __await__(self):
        if self.rejected:
            if inspect.isclass(self.raises):
                raise self.raises()
            raise self.raises
        value = self.value
        if hasattr(value, '__await__'):
            value = yield from value.__await__()
        return value


def resolved(value):
    return Settled(value=value)


def rejected(error):
    return Settled(raises=error, rejected=True)
