class PromiseError(Exception):
    pass


class ConstructionError(PromiseError, TypeError):
    def __init__(self, message='promise resolver must be callable'):
        super().__init__(message)


class SelfResolutionError(PromiseError, TypeError):
    def __init__(self, message='illegal state: promise cannot be resolved with itself'):
        super().__init__(message)


class IterableRequiredError(PromiseError, TypeError):
    def __init__(self, name):
        super().__init__('%s: non-empty iterable required' % name)


class AccessError(PromiseError, LookupError):
    pass


class PredicateError(PromiseError, ValueError):
    def __init__(self, message='no such promise value'):
        super().__init__(message)


class RejectionError(PromiseError):
    """Carries a rejection reason that is not itself an exception."""

    def __init__(self, reason):
        super().__init__(reason)
        self.reason = reason

    def __str__(self):
        return repr(self.reason)


class UnhandledRejection(RejectionError):
    """A rejection reached a terminal consumer with nobody to handle it."""


def as_exception(reason, error_class=RejectionError):
    if isinstance(reason, BaseException) and error_class is RejectionError:
        return reason
    error = error_class(reason)
    if isinstance(reason, BaseException):
        error.__cause__ = reason
    return error
