import threading

import pytest

from bellydoc.params import Params
from bellydoc.registry import Slots, WidgetData, WidgetRegistry


def _builder_a(world, data):
    return "a"


def _builder_b(world, data):
    return "b"


class _SplitParser:
    def parse(self, source):
        return source.split()


def test_widget_data_defaults():
    data = WidgetData(7)
    assert data.entity == 7
    assert data.children == []
    assert isinstance(data.params, Params)
    assert data.params.classes() == set()


def test_widget_data_children_not_shared():
    first = WidgetData(1)
    second = WidgetData(2)
    first.children.append(10)
    assert second.children == []


def test_register_and_get():
    registry = WidgetRegistry()
    registry.register("button", _builder_a)
    assert registry.get("button") is _builder_a
    assert registry.has("button") is True
    assert "button" in registry


def test_get_missing_returns_none():
    registry = WidgetRegistry()
    assert registry.get("nothing") is None
    assert registry.has("nothing") is False


def test_register_replaces():
    registry = WidgetRegistry()
    registry.register("button", _builder_a)
    registry.register("button", _builder_b)
    assert registry.get("button") is _builder_b
    assert len(registry) == 1


def test_default_styles_with_parser_object():
    registry = WidgetRegistry()
    registry.register("button", _builder_a, "x y")
    registry.register("label", _builder_b, "z")
    rules = registry.default_styles(_SplitParser())
    assert sorted(rules) == ["x", "y", "z"]


def test_default_styles_with_callable_and_empty_sources():
    registry = WidgetRegistry()
    registry.register("button", _builder_a)
    seen = []

    def parser(source):
        seen.append(source)
        return []

    assert registry.default_styles(parser) == []
    assert seen == [""]


def test_default_styles_empty_registry():
    assert WidgetRegistry().default_styles(_SplitParser()) == []


def test_registry_concurrent_registration():
    registry = WidgetRegistry()
    names = [f"w{i}" for i in range(50)]
    threads = [
        threading.Thread(target=registry.register, args=(name, _builder_a))
        for name in names
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert len(registry) == len(names)
    assert all(registry.has(name) for name in names)


def test_slots_insert_and_remove():
    slots = Slots()
    slots.insert("header", [1, 2])
    assert slots.keys() == {"header"}
    assert slots.remove("header") == [1, 2]
    assert slots.keys() == set()


def test_slots_remove_missing():
    assert Slots().remove("missing") is None


def test_slots_insert_replaces():
    slots = Slots()
    slots.insert("body", [1])
    slots.insert("body", (3, 4))
    assert slots.remove("body") == [3, 4]


def test_slots_stores_copy():
    slots = Slots()
    entities = [5]
    slots.insert("footer", entities)
    entities.append(6)
    assert slots.remove("footer") == [5]


@pytest.mark.parametrize("tags", [["a"], ["a", "b", "c"]])
def test_slots_keys(tags):
    slots = Slots()
    for tag in tags:
        slots.insert(tag, [])
    assert slots.keys() == set(tags)