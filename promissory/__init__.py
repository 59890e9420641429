from .deferred import Deferred
from .environment import DEFAULT_DELAY, Environment, default_environment
from .errors import (
    AccessError,
    ConstructionError,
    IterableRequiredError,
    PredicateError,
    PromiseError,
    RejectionError,
    SelfResolutionError,
    UnhandledRejection,
)
from .outcome import FULFILLED, PENDING, REJECTED, UNBOUND, Outcome, is_thenable
from .promise import Promise
from .scheduler import AsyncioScheduler, Scheduler

__all__ = (
    'DEFAULT_DELAY',
    'FULFILLED',
    'PENDING',
    'REJECTED',
    'UNBOUND',
    'AccessError',
    'AsyncioScheduler',
    'ConstructionError',
    'Deferred',
    'Environment',
    'IterableRequiredError',
    'Outcome',
    'PredicateError',
    'Promise',
    'PromiseError',
    'RejectionError',
    'Scheduler',
    'SelfResolutionError',
    'UnhandledRejection',
    'default_environment',
    'is_thenable',
)
