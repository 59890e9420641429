from collections.abc import Iterable, Mapping
from functools import partial

from .errors import IterableRequiredError
from .outcome import is_thenable
from .promise import fulfill


def require_items(promises, name):
    if isinstance(promises, Mapping) or not isinstance(promises, Iterable):
        raise IterableRequiredError(name)
    items = list(promises)
    if not items:
        raise IterableRequiredError(name)
    return items


def follow(cls, item, env, on_fulfilled, on_rejected):
    # handlers go on while the wrapper is pending so a thenable that
    # calls back synchronously reaches them in the same call
    wrapper = cls(env=env)
    wrapper.then(on_fulfilled, on_rejected)
    fulfill(wrapper, item)


def gather(cls, promises, env=None):
    items = require_items(promises, 'Promise.all')

    def resolver(resolve, reject):
        results = [None] * len(items)
        remaining = len(items)

        def on_fulfilled(index, value):
            nonlocal remaining
            results[index] = value
            remaining -= 1
            if not remaining:
                resolve(results)

        for index, item in enumerate(items):
            if is_thenable(item):
                follow(cls, item, env, partial(on_fulfilled, index), reject)
            else:
                on_fulfilled(index, item)

    return cls(resolver, env=env)


def race(cls, promises, env=None):
    items = require_items(promises, 'Promise.race')

    def resolver(resolve, reject):
        for item in items:
            if is_thenable(item):
                follow(cls, item, env, resolve, reject)
            else:
                resolve(item)

    return cls(resolver, env=env)
