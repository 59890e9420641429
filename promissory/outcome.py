from collections import namedtuple

PENDING = 'pending'
FULFILLED = 'fulfilled'
REJECTED = 'rejected'


class _Marker:
    def __init__(self, name):
        self.name = name

    def __repr__(self):
        return self.name

    def __bool__(self):
        return False


UNBOUND = _Marker('UNBOUND')
NOT_THENABLE = _Marker('NOT_THENABLE')


class Outcome(namedtuple('Outcome', 'kind value')):
    """A settlement: ``(FULFILLED, value)`` or ``(REJECTED, reason)``."""

    __slots__ = ()

    @property
    def fulfilled(self):
        return self.kind == FULFILLED

    @property
    def rejected(self):
        return self.kind == REJECTED


def fulfilled(value):
    return Outcome(FULFILLED, value)


def rejected(reason):
    return Outcome(REJECTED, reason)


def safe_call(fn, *args, **kwargs):
    try:
        return fulfilled(fn(*args, **kwargs))
    except Exception as e:
        return rejected(e)


def invoke(handler, context, *args, **kwargs):
    if context is UNBOUND:
        return handler(*args, **kwargs)
    return handler(context, *args, **kwargs)


def inspect_thenable(obj):
    """Classify ``obj`` by whether it exposes a callable ``then``.

    Returns NOT_THENABLE, a fulfilled outcome holding the bound ``then``,
    or a rejected outcome holding the error raised while reading it.
    """
    if obj is None or isinstance(obj, type):
        return NOT_THENABLE
    then = safe_call(getattr, obj, 'then', None)
    if then.rejected:
        return then
    if not callable(then.value):
        return NOT_THENABLE
    return then


def is_thenable(obj):
    thenable = inspect_thenable(obj)
    return thenable is not NOT_THENABLE and thenable.fulfilled
