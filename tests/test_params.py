import pytest

from bellydoc.params import Param, Params, ParamsError, ParamTarget, StyleParams
from bellydoc.variant import Variant, VariantKind, as_bool


def test_basic_classes():
    attrs = Params()
    attrs.add(Param.parse("class", Variant.string("some-class")))
    assert attrs.classes() == {"some-class"}


def test_c_not_overrides_class():
    attrs = Params()
    attrs.add(Param.parse("class", Variant.string("class1 class2")))
    attrs.add(Param.parse("c:some-other-class", Variant()))
    assert attrs.classes() == {"class1", "class2", "some-other-class"}


def test_class_not_overrides_c():
    attrs = Params()
    attrs.add(Param.parse("c:some-other-class", Variant()))
    attrs.add(Param.parse("class", Variant.string("class1 class2")))
    assert attrs.classes() == {"class1", "class2", "some-other-class"}


def test_basic_styles():
    attrs = Params()
    attrs.add(Param.parse("s:color", Variant.string("black")))
    styles = attrs.styles()
    assert len(styles) == 1
    assert styles["color"].get(str) == "black"


def test_parse_prefixes():
    cls_param = Param.parse("c:hidden", "ignored")
    assert cls_param.name == "hidden"
    assert cls_param.target is ParamTarget.CLASS
    assert cls_param.value.kind is VariantKind.UNDEFINED

    style_param = Param.parse("s:width", "10px")
    assert style_param.name == "width"
    assert style_param.target is ParamTarget.STYLE
    assert style_param.value.get(str) == "10px"

    plain = Param.parse("value", "3")
    assert plain.target is ParamTarget.PARAM
    assert plain.name == "value"


def test_classes_are_taken():
    attrs = Params()
    attrs.insert("class", "a b")
    assert attrs.classes() == {"a", "b"}
    assert attrs.classes() == set()


def test_id_is_dropped():
    attrs = Params()
    attrs.insert("id", "main")
    assert attrs.id() == "main"
    assert attrs.id() is None


def test_get_with_type():
    attrs = Params()
    attrs.insert("label", "hello")
    assert attrs.get("label", str) == "hello"
    assert attrs.get("label", int) is None
    assert attrs.get("missing", str) is None
    assert attrs.get_variant("label").get(str) == "hello"


def test_drop_variant_removes():
    attrs = Params()
    attrs.insert("label", "hello")
    variant = attrs.drop_variant("label")
    assert variant.get(str) == "hello"
    assert attrs.drop_variant("label") is None


def test_drop_or_default():
    attrs = Params()
    attrs.insert("label", "given")
    assert attrs.drop_or_default("label", "fallback") == "given"
    assert attrs.drop_or_default("label", "fallback") == "fallback"


def test_param_take_leaves_undefined():
    param = Param.parse("x", "value")
    assert param.take(str) == "value"
    assert param.value.kind is VariantKind.UNDEFINED


def test_nested_params_merge():
    outer = Params()
    outer.insert("title", "outer")
    outer.insert("class", "a")
    inner = Params()
    inner.insert("title", "inner")
    inner.insert("x", "1")
    inner.insert("class", "b")
    outer.insert("params", Variant.params(inner))
    assert outer.get("title", str) == "outer"
    assert outer.get("x", str) == "1"
    assert outer.classes() == {"a", "b"}


def test_params_with_wrong_type_raises():
    attrs = Params()
    with pytest.raises(ParamsError):
        attrs.insert("params", "not params")


def test_merge_combines_commands():
    calls = []
    first = Params()
    first.add(Param.from_commands("with", lambda target: calls.append(("a", target))))
    second = Params()
    second.add(Param.from_commands("with", lambda target: calls.append(("b", target))))
    first.merge(second)
    first.apply_commands("with", "entity")
    assert calls == [("a", "entity"), ("b", "entity")]
    assert first.commands("with") is None


def test_merge_styles_other_wins():
    first = Params()
    first.insert("s:color", "red")
    second = Params()
    second.insert("s:color", "blue")
    first.merge(second)
    assert first.styles()["color"].get(str) == "blue"


def test_try_get():
    attrs = Params()
    attrs.insert("enabled", "yes")
    attrs.insert("broken", "maybe")
    assert attrs.try_get("enabled", as_bool) is True
    assert attrs.try_get("broken", as_bool) is None
    assert attrs.try_get("missing", as_bool) is None


def test_style_params_transform():
    styles = StyleParams()
    styles["margin"] = Variant.string("1px")
    styles["color"] = Variant.string("red")

    def expand(tag, variant):
        if tag == "margin":
            value = variant.get(str)
            return [("margin-left", value), ("margin-right", value)]
        return [(tag, variant.get(str))]

    assert styles.transform(expand) == {
        "margin-left": "1px",
        "margin-right": "1px",
        "color": "red",
    }


def test_style_constructor():
    param = Param.style("color", "green")
    attrs = Params()
    attrs.add(param)
    assert attrs.styles()["color"].get(str) == "green"
    assert attrs.rest == {}