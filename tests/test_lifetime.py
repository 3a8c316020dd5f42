import unittest

import pytest

from petite import Container, Lifetime, ResolveError


class TestLifetimeControl(unittest.TestCase):
    cont: Container

    def setUp(self):
        self.cont = Container()

    def test_resolve_register_singleton_returns_same_instance(self):
        class A: ...

        self.cont.register_singleton(A, lambda _: A())
        a1 = self.cont.resolve(A)
        a2 = self.cont.resolve(A)
        assert a2 is a1, "SINGLETON should return the cached instance"

    def test_resolve_register_with_singleton_lifetime_returns_same_instance(self):
        class A: ...

        self.cont.register(A, lambda _: A(), lifetime=Lifetime.SINGLETON)
        assert self.cont.resolve(A) is self.cont.resolve(A)

    def test_resolve_register_transient_returns_new_instances(self):
        class A: ...

        self.cont.register(A, lambda _: A())
        a1 = self.cont.resolve(A)
        a2 = self.cont.resolve(A)
        assert a2 is not a1, "TRANSIENT should return new instances"

    def test_register_instance_is_always_singleton(self):
        class A: ...

        inst = A()
        self.cont.register_instance(A, inst)
        a = self.cont.resolve(A)
        b = self.cont.resolve(A)
        assert a is inst
        assert b is inst


class TestFactoryInvocations(unittest.TestCase):
    cont: Container

    def setUp(self):
        self.cont = Container()
        self.calls = 0

    def _make(self, _):
        self.calls += 1
        return object()

    def test_transient_factory_called_on_every_resolve(self):
        self.cont.register(object, self._make)
        for _ in range(3):
            self.cont.resolve(object)
        assert self.calls == 3

    def test_singleton_factory_called_once(self):
        self.cont.register_singleton(object, self._make)
        for _ in range(3):
            self.cont.resolve(object)
        assert self.calls == 1

    def test_singleton_caches_falsy_values(self):
        def make_none(_):
            self.calls += 1

        self.cont.register_singleton("nothing", make_none)
        assert self.cont.resolve("nothing") is None
        assert self.cont.resolve("nothing") is None
        assert self.calls == 1

    def test_singleton_retries_factory_after_failure(self):
        def flaky(_):
            self.calls += 1
            if self.calls == 1:
                msg = "first attempt fails"
                raise ConnectionError(msg)
            return "connected"

        self.cont.register_singleton("db", flaky)

        with pytest.raises(ResolveError):
            self.cont.resolve("db")

        assert self.cont.resolve("db") == "connected"
        assert self.cont.resolve("db") == "connected"
        assert self.calls == 2


def test_named_registrations_keep_their_own_lifetime():
    c = Container()

    class Conn: ...

    c.register_singleton(Conn, lambda _: Conn(), name="primary")
    c.register(Conn, lambda _: Conn(), name="scratch")

    assert c.resolve(Conn, "primary") is c.resolve(Conn, "primary")
    assert c.resolve(Conn, "scratch") is not c.resolve(Conn, "scratch")
    assert c.resolve(Conn, "primary") is not c.resolve(Conn, "scratch")
