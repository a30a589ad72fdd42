"""Tests for builderdocs.introspection.registry."""

import logging

from builderdocs.introspection import registry as registry_module
from builderdocs.introspection import EntryPointRegistry, StaticRegistry
from builderdocs.vocabulary import ActionBuilderFactory, ProcessorBuilderFactory, StepBuilderFactory
from sample_api.actions import LogProcessorFactory, SetActionFactory


class FakeEntryPoint:
    def __init__(self, name, target):
        self.name = name
        self.value = f"fake:{name}"
        self._target = target

    def load(self):
        if isinstance(self._target, Exception):
            raise self._target
        return self._target


class TestStaticRegistry:
    def test_filters_by_kind(self):
        registry = StaticRegistry([SetActionFactory(), LogProcessorFactory()])
        assert [f.name() for f in registry.implementations(ActionBuilderFactory)] == ["set"]
        assert [f.name() for f in registry.implementations(ProcessorBuilderFactory)] == ["log"]
        assert registry.implementations(StepBuilderFactory) == []

    def test_register_keeps_order(self):
        registry = StaticRegistry()
        second = SetActionFactory()
        registry.register(SetActionFactory())
        registry.register(second)
        assert registry.implementations(ActionBuilderFactory)[1] is second


class TestEntryPointRegistry:
    def test_loads_group(self, monkeypatch, caplog):
        groups = []

        def fake_entry_points(group):
            groups.append(group)
            return [
                FakeEntryPoint("set", SetActionFactory),
                FakeEntryPoint("broken", ImportError("no module named broken")),
                FakeEntryPoint("wrong", LogProcessorFactory),
            ]

        monkeypatch.setattr(registry_module, "entry_points", fake_entry_points)
        registry = EntryPointRegistry()
        with caplog.at_level(logging.WARNING, logger="builderdocs.introspection.registry"):
            factories = registry.implementations(ActionBuilderFactory)
        assert [f.name() for f in factories] == ["set"]
        assert "Cannot load factory broken" in caplog.text
        assert "Entry point wrong in builderdocs.actions is not a ActionBuilderFactory" in caplog.text

        assert registry.implementations(ActionBuilderFactory) is factories
        assert groups == ["builderdocs.actions"]

    def test_kind_without_group(self, caplog):
        class Ungrouped:
            pass

        with caplog.at_level(logging.WARNING, logger="builderdocs.introspection.registry"):
            assert EntryPointRegistry().implementations(Ungrouped) == []
        assert "declares no entry-point group" in caplog.text
