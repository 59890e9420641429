import pytest

from promissory import Environment, Promise, Scheduler


@pytest.fixture
def env():
    return Environment(scheduler=Scheduler())


@pytest.fixture
def run(env):
    return env.scheduler.run


@pytest.fixture
def later(env):
    def _later(delay, value, *, fail=False):
        def resolver(resolve, reject):
            env.scheduler.call_later(delay, reject if fail else resolve, value)

        return Promise(resolver, env=env)

    return _later
