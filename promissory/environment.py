from .scheduler import Scheduler

DEFAULT_DELAY = 0.004


class Environment:
    """Configuration shared by a family of promises.

    Promises created by chaining inherit the environment of their parent.
    ``onerror`` is consulted by ``done``/``finally_`` when a rejection
    arrives without a rejection handler; when it is ``None`` the rejection
    is raised as :class:`~promissory.errors.UnhandledRejection`.

    The default :class:`~promissory.scheduler.Scheduler` only runs when
    driven, so continuations on settled promises wait for
    ``env.scheduler.run()``; pass an ``AsyncioScheduler`` to have an
    event loop run them instead.
    """

    def __init__(self, scheduler=None, onerror=None, delay=DEFAULT_DELAY):
        self.scheduler = scheduler if scheduler is not None else Scheduler()
        self.onerror = onerror
        self.delay = delay

    def __repr__(self):
        return '<Environment scheduler=%r delay=%r>' % (self.scheduler, self.delay)

    def schedule(self, callback, *args):
        self.scheduler.call_later(self.delay, callback, *args)


default_environment = Environment()


def resolve_environment(env):
    if env is None:
        return default_environment
    return env
