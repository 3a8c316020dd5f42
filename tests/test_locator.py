import unittest

import pytest

from petite import ActivationError, Container, ResolveError, ServiceLocator, UnknownRegistrationError


class Plugin: ...


class TestServiceLocator(unittest.TestCase):
    cont: Container

    def setUp(self):
        self.cont = Container()
        self.locator = ServiceLocator(self.cont)

    def test_get_instance_forwards_to_unnamed_registration(self):
        plugin = Plugin()
        self.cont.register_instance(Plugin, plugin)

        assert self.locator.get_instance(Plugin) is plugin
        assert self.locator(Plugin) is plugin

    def test_get_instance_forwards_key_as_name(self):
        plugin = Plugin()
        self.cont.register_instance(Plugin, plugin, name="extra")

        assert self.locator.get_instance(Plugin, "extra") is plugin

    def test_get_all_instances_forwards_to_resolve_all(self):
        self.cont.register(Plugin, lambda _: Plugin())
        self.cont.register(Plugin, lambda _: Plugin(), name="extra")

        assert len(self.locator.get_all_instances(Plugin)) == 2

    def test_unknown_registration_is_reported_as_activation_error(self):
        with pytest.raises(ActivationError) as ctx:
            self.locator.get_instance(Plugin, "missing")

        assert isinstance(ctx.value.__cause__, UnknownRegistrationError)
        assert 'key "missing"' in str(ctx.value)
        assert "Plugin" in str(ctx.value)

    def test_failing_factory_is_reported_as_activation_error(self):
        def fail(_):
            msg = "boom"
            raise RuntimeError(msg)

        self.cont.register(Plugin, fail)

        with pytest.raises(ActivationError) as ctx:
            self.locator.get_all_instances(Plugin)

        assert isinstance(ctx.value.__cause__, ResolveError)
        assert "all instances of type" in str(ctx.value)
