import asyncio
import heapq
import itertools
import time

from logging import getLogger

from .errors import PromiseError, as_exception

LOGGER = getLogger(__name__)


class Scheduler:
    """Single-threaded cooperative timer queue.

    Nothing runs until the owner drives the queue with :meth:`run`,
    :meth:`run_once` or :meth:`run_until_complete`. Timers fire in deadline
    order, and in submission order when deadlines tie. An exception raised
    by a callback propagates out of the driving call.
    """

    def __init__(self, clock=time.monotonic, sleep=time.sleep):
        self._clock = clock
        self._sleep = sleep
        self._timers = []
        self._counter = itertools.count()

    def __len__(self):
        return len(self._timers)

    def __repr__(self):
        return '<%s timers=%d>' % (self.__class__.__name__, len(self._timers))

    def call_later(self, delay, callback, *args):
        deadline = self._clock() + delay
        heapq.heappush(self._timers, (deadline, next(self._counter), callback, args))

    def call_soon(self, callback, *args):
        self.call_later(0, callback, *args)

    def run_once(self):
        if not self._timers:
            return False
        remaining = self._timers[0][0] - self._clock()
        if remaining > 0:
            self._sleep(remaining)
        _, _, callback, args = heapq.heappop(self._timers)
        callback(*args)
        return True

    def run(self):
        count = 0
        while self.run_once():
            count += 1
        LOGGER.debug('scheduler idle after %d callbacks', count)
        return count

    def run_until_complete(self, promise):
        while promise.is_pending() and self.run_once():
            pass
        if promise.is_pending():
            raise PromiseError('scheduler went idle before the promise settled')
        if promise.is_rejected():
            raise as_exception(promise.reason())
        return promise.value()


class AsyncioScheduler:
    """Runs deferred continuations on an asyncio event loop."""

    def __init__(self, loop=None):
        self._loop = loop

    def call_later(self, delay, callback, *args):
        loop = self._loop if self._loop is not None else asyncio.get_running_loop()
        loop.call_later(delay, callback, *args)

    def call_soon(self, callback, *args):
        self.call_later(0, callback, *args)
