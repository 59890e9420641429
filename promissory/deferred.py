from .promise import Promise, fulfill, reject


class Deferred:
    """Settles an internally held promise from outside of it."""

    def __init__(self, env=None):
        self.promise = Promise(env=env)

    def __repr__(self):
        return '<Deferred %r>' % (self.promise,)

    def resolve(self, value=None):
        if self.is_completed():
            return
        fulfill(self.promise, value)

    def reject(self, reason):
        if self.is_completed():
            return
        reject(self.promise, reason)

    def is_completed(self):
        return self.promise.is_settled()
