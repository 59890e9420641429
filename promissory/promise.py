import asyncio

from functools import partial
from logging import getLogger

from .environment import resolve_environment
from .errors import (
    AccessError,
    ConstructionError,
    PredicateError,
    SelfResolutionError,
    UnhandledRejection,
    as_exception,
)
from .outcome import (
    FULFILLED,
    NOT_THENABLE,
    PENDING,
    REJECTED,
    UNBOUND,
    Outcome,
    fulfilled,
    inspect_thenable,
    invoke,
    is_thenable,
    rejected,
    safe_call,
)

LOGGER = getLogger(__name__)


def identity(value):
    return value


def always_true(value):
    return True


def complete(promise, outcome):
    if promise._outcome is not None:
        return promise
    promise._outcome = outcome
    handlers, promise._handlers = promise._handlers, None
    LOGGER.debug('%r settled with %d handlers queued', promise, len(handlers))

    error = None
    for handler in handlers:
        try:
            handler(outcome)
        except Exception as e:
            if error is None:
                error = e
            else:
                LOGGER.error('handler failed while settling %r', promise, exc_info=e)
    if error is not None:
        raise error
    return promise


def fulfill(promise, value):
    if promise._outcome is None:
        adopt(promise, fulfill_step(promise, value))
    return promise


def reject(promise, reason):
    return complete(promise, rejected(reason))


def settle(promise, outcome):
    if outcome.fulfilled:
        return fulfill(promise, outcome.value)
    return reject(promise, outcome.value)


def fulfill_step(promise, value):
    if value is promise:
        reject(promise, SelfResolutionError())
        return None
    thenable = inspect_thenable(value)
    if thenable is NOT_THENABLE:
        complete(promise, fulfilled(value))
        return None
    if thenable.rejected:
        reject(promise, thenable.value)
        return None
    return thenable.value


def adopt(promise, then):
    # Thenables that call back synchronously are followed in this loop
    # rather than by recursing into fulfill.
    while then is not None:
        LOGGER.debug('%r adopting %r', promise, then)
        outcome = call_then(promise, then)
        if outcome is None:
            return
        if outcome.rejected:
            reject(promise, outcome.value)
            return
        then = fulfill_step(promise, outcome.value)


def call_then(promise, then):
    calls = []
    running = True

    def callback(kind, *args):
        # a bound thenable passes its context ahead of the value
        if calls:
            return
        outcome = Outcome(kind, args[-1] if args else None)
        calls.append(outcome)
        if not running:
            settle(promise, outcome)

    owner = getattr(then, '__self__', None)
    if isinstance(owner, Promise) and getattr(then, '__func__', None) is Promise.then:
        # settle outside safe_call so terminal failures reach the settling call
        running = False
        owner._then(owner._child(), execute_adoption, callback)
        return None

    try:
        then(partial(callback, FULFILLED), partial(callback, REJECTED))
    except Exception as e:
        if not calls:
            calls.append(rejected(e))
    finally:
        running = False

    if calls:
        return calls[0]
    return None


def execute_job(promise, on_fulfilled, on_rejected, outcome):
    handler = on_fulfilled if outcome.fulfilled else on_rejected
    if not callable(handler):
        settle(promise, outcome)
        return

    mapped = safe_call(invoke, handler, promise._context, outcome.value)
    if mapped.rejected:
        reject(promise, mapped.value)
    elif mapped.value is None:
        # the handler declined to transform the outcome
        settle(promise, outcome)
    else:
        fulfill(promise, mapped.value)


def execute_adoption(promise, callback, unused, outcome):
    callback(outcome.kind, outcome.value)


def execute_final(promise, on_resolved, on_rejected, outcome):
    context = promise._context
    if outcome.fulfilled:
        handler = on_resolved
    elif callable(on_rejected):
        handler = on_rejected
    elif promise._env.onerror is not None:
        handler, context = promise._env.onerror, UNBOUND
    else:
        raise as_exception(outcome.value, UnhandledRejection)

    if not callable(handler):
        return
    result = safe_call(invoke, handler, context, outcome.value)
    if result.rejected:
        LOGGER.error('terminal handler of %r failed', promise, exc_info=result.value)


def settle_future(future, outcome):
    if future.done():
        return
    if outcome.fulfilled:
        future.set_result(outcome.value)
    else:
        future.set_exception(as_exception(outcome.value))


class Promise:
    """A single-assignment container for a value that arrives later.

    ``resolver``, when given, is called immediately with two callbacks that
    fulfill and reject the promise. Handlers attached while the promise is
    pending run synchronously when it settles; handlers attached after it
    settled run on the environment's scheduler, never in the attaching call.
    """

    def __init__(self, resolver=None, env=None):
        if resolver is not None and not callable(resolver):
            raise ConstructionError()

        self._outcome = None
        self._handlers = []
        self._context = UNBOUND
        self._env = resolve_environment(env)

        if resolver is None:
            return

        promise = self

        def on_resolve(value=None):
            fulfill(promise, value)

        def on_reject(reason):
            reject(promise, reason)

        try:
            resolver(on_resolve, on_reject)
        except Exception as e:
            if promise.is_settled():
                LOGGER.warning('resolver of %r raised after settling it', promise, exc_info=e)
            reject(promise, e)

    def __repr__(self):
        if self._outcome is None:
            return '<Promise pending>'
        return '<Promise %s: %r>' % self._outcome

    def __await__(self):
        future = asyncio.get_running_loop().create_future()
        if self._outcome is None:
            self._handlers.append(partial(settle_future, future))
        else:
            settle_future(future, self._outcome)
        return future.__await__()

    @property
    def env(self):
        return self._env

    @property
    def state(self):
        if self._outcome is None:
            return PENDING
        return self._outcome.kind

    @property
    def outcome(self):
        return self._outcome

    def is_pending(self):
        return self._outcome is None

    def is_settled(self):
        return self._outcome is not None

    def is_fulfilled(self):
        return self._outcome is not None and self._outcome.fulfilled

    def is_rejected(self):
        return self._outcome is not None and self._outcome.rejected

    def value(self):
        if not self.is_fulfilled():
            raise AccessError('cannot get value from unfulfilled promise')
        return self._outcome.value

    def reason(self):
        if not self.is_rejected():
            raise AccessError('cannot get reason from unrejected promise')
        return self._outcome.value

    def _child(self):
        return Promise(env=self._env)

    def _then(self, promise, job, on_fulfilled=None, on_rejected=None):
        if promise._context is UNBOUND:
            promise._context = self._context

        if self._outcome is not None:
            self._env.schedule(job, promise, on_fulfilled, on_rejected, self._outcome)
        else:
            self._handlers.append(partial(job, promise, on_fulfilled, on_rejected))
        return promise

    def then(self, on_fulfilled=None, on_rejected=None):
        return self._then(self._child(), execute_job, on_fulfilled, on_rejected)

    def catch(self, on_rejected):
        return self.then(None, on_rejected)

    def peek(self, handler):
        def inspect(*args):
            result = safe_call(handler, *args)
            if result.rejected:
                LOGGER.debug('peek handler of %r failed', self, exc_info=result.value)

        return self.then(inspect, inspect)

    def always(self, handler):
        return self.then(handler, handler)

    def done(self, on_resolved=None, on_rejected=None):
        self._then(self._child(), execute_final, on_resolved, on_rejected)

    def finally_(self, handler=None):
        self.done(handler, handler)

    def bind(self, context):
        child = self._child()
        child._context = context
        return self._then(child, execute_job)

    def spread(self, on_fulfilled, on_rejected=None):
        def apply(*args):
            *context, value = args
            items = value if isinstance(value, (list, tuple)) else (value,)
            return on_fulfilled(*context, *items)

        return self.then(apply, on_rejected)

    def collect(self, predicate, mapper):
        def pick(*args):
            value = args[-1]
            if not predicate(value):
                raise PredicateError()
            return mapper(value)

        return self.then(pick)

    def filter(self, predicate):
        return self.collect(predicate, identity)

    def map(self, mapper):
        return self.collect(always_true, mapper)

    def recover(self, handler):
        def restore(*args):
            # returning None leaves the original rejection in place
            return handler(args[-1])

        return self.catch(restore)

    @classmethod
    def resolve(cls, value=None, env=None):
        return fulfill(cls(env=env), value)

    @classmethod
    def reject(cls, reason, env=None):
        return reject(cls(env=env), reason)

    @classmethod
    def try_(cls, fn, *args, context=UNBOUND, env=None, **kwargs):
        promise = cls(env=env)
        result = safe_call(invoke, fn, context, *args, **kwargs)
        return settle(promise, result)

    @classmethod
    def all(cls, promises, env=None):
        from .combinators import gather

        return gather(cls, promises, env)

    @classmethod
    def race(cls, promises, env=None):
        from .combinators import race

        return race(cls, promises, env)

    @staticmethod
    def is_thenable(obj):
        return is_thenable(obj)

    @staticmethod
    def defer(env=None):
        from .deferred import Deferred

        return Deferred(env)
