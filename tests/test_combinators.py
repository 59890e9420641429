import pytest

from promissory import IterableRequiredError, Promise


class TestAll:
    @pytest.mark.parametrize('inputs', [{}, [], (), {'a': 1}, 5, None])
    def test_requires_non_empty_iterable(self, env, inputs):
        with pytest.raises(IterableRequiredError, match='Promise.all: non-empty iterable required'):
            Promise.all(inputs, env=env)

    def test_is_a_type_error(self, env):
        with pytest.raises(TypeError):
            Promise.all([], env=env)

    def test_promises(self, env):
        p = Promise.all([Promise.resolve(v, env=env) for v in [1, 2, 3]], env=env)

        assert env.scheduler.run_until_complete(p) == [1, 2, 3]

    def test_promises_and_plain_values(self, env):
        p = Promise.all([Promise.resolve(1, env=env), 2, Promise.resolve(3, env=env)], env=env)

        assert env.scheduler.run_until_complete(p) == [1, 2, 3]

    def test_plain_values_only(self, env):
        p = Promise.all([1, 2], env=env)

        assert p.value() == [1, 2]

    def test_generator(self, env):
        p = Promise.all((value * 2 for value in range(3)), env=env)

        assert p.value() == [0, 2, 4]

    def test_keeps_input_order(self, env):
        first, second = Promise.defer(env), Promise.defer(env)
        p = Promise.all([first.promise, second.promise], env=env)

        second.resolve('b')
        assert p.is_pending()
        first.resolve('a')
        assert p.value() == ['a', 'b']

    def test_rejection_after_other_fulfillments(self, env):
        first, second = Promise.defer(env), Promise.defer(env)
        p = Promise.all([first.promise, second.promise, 'plain'], env=env)

        first.resolve(1)
        assert p.is_pending()
        second.reject('late')
        assert p.reason() == 'late'

    def test_first_rejection_wins(self, env):
        error = ValueError('rejectedAll')
        p = Promise.all([Promise.reject(error, env=env), Promise.resolve(3, env=env)], env=env)

        with pytest.raises(ValueError) as info:
            env.scheduler.run_until_complete(p)
        assert info.value is error

    def test_later_outcomes_are_discarded(self, env, run, later):
        p = Promise.all([later(0.01, 'slow fail', fail=True), later(0.001, 'fast fail', fail=True)], env=env)

        run()
        assert p.reason() == 'fast fail'

    def test_foreign_thenables(self, env):
        class Thenable:
            def then(self, on_fulfilled, on_rejected):
                on_fulfilled('foreign')

        p = Promise.all([Thenable(), 'plain'], env=env)

        assert p.value() == ['foreign', 'plain']


class TestRace:
    @pytest.mark.parametrize('inputs', [{}, [], 5])
    def test_requires_non_empty_iterable(self, env, inputs):
        with pytest.raises(IterableRequiredError, match='Promise.race: non-empty iterable required'):
            Promise.race(inputs, env=env)

    def test_first_to_settle(self, env, later):
        p = Promise.race([later(0.05, 'one'), later(0.01, 'two')], env=env)

        assert env.scheduler.run_until_complete(p) == 'two'

    def test_plain_value_wins(self, env, later):
        p = Promise.race([later(0.05, 'one'), 'two'], env=env)

        assert p.value() == 'two'

    def test_plain_value_beats_settled_promise(self, env, run):
        p = Promise.race([Promise.resolve('one', env=env), 'two'], env=env)

        assert p.value() == 'two'
        run()
        assert p.value() == 'two'

    def test_first_rejection(self, env, run, later):
        p = Promise.race([later(0.05, 'one'), later(0.01, 'failed', fail=True)], env=env)

        run()
        assert p.reason() == 'failed'

    def test_synchronous_thenable_wins(self, env, run):
        class Thenable:
            def then(self, on_fulfilled, on_rejected):
                on_fulfilled('foreign')

        p = Promise.race([Thenable(), 'plain'], env=env)

        assert p.value() == 'foreign'
        run()
        assert p.value() == 'foreign'
