# bellydoc

A library for working with a declarative UI toolkit's element markup (EML):
dynamically typed values, widget parameters, a widget registry and a markup
parser that reports errors with a pointer to the offending line.

It has no dependencies outside the standard library.

## Modules

- `bellydoc.variant`: `Variant`, a tagged value (`VariantKind`) holding
  strings, booleans, style tokens, parameter sets, command callbacks or
  arbitrary boxed objects. `Variant.get`, `Variant.take`, `Variant.holds`,
  `Variant.merge` and `Variant.get_or_parse` read it; `as_string`, `as_float`,
  `as_u8` and `as_bool` convert it, raising `VariantError` on failure.
  `JustifyContent.parse` and `justify_content_from` read flex alignment.
- `bellydoc.params`: `Param` and `Params`, which sort widget attributes into
  plain parameters, classes (`c:` prefix or `class="a b"`) and inline styles
  (`s:` prefix, collected in `StyleParams`). `ParamsError` is raised when a
  `params` attribute does not hold a `Params` value.
- `bellydoc.registry`: `WidgetRegistry` (thread-safe mapping of tag names to
  builders and their default styles), `WidgetData` and `Slots`.
- `bellydoc.eml`: `parse`, which turns EML markup into a tree of
  `EmlElement`, `EmlText` and `EmlSlot` nodes, and raises `EmlParseError`
  (with `row` and `column` attributes) on bad markup.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Usage

Sorting widget attributes:

```python
from bellydoc.params import Param, Params
from bellydoc.variant import Variant

params = Params()
params.add(Param.parse("class", Variant.string("card wide")))
params.add(Param.parse("c:highlighted", Variant()))
params.add(Param.parse("s:color", Variant.string("black")))

params.classes()   # {"card", "wide", "highlighted"}
params.styles()    # {"color": Variant::String('black')}
```

Converting values:

```python
from bellydoc.variant import JustifyContent, Variant, as_bool, as_float

as_bool(Variant.string("yes"))     # True
as_float(Variant.string("1.5"))    # 1.5
JustifyContent.parse("center")     # JustifyContent.CENTER
```

Parsing markup:

```python
from bellydoc.eml import EmlParseError, parse
from bellydoc.registry import WidgetRegistry

registry = WidgetRegistry()
registry.register("div", lambda *args: None)

root = parse('<div s:color="red">Hello   world</div>', registry)
# EmlElement(name='div', params={'s:color': 'red'}, children=[EmlText(text='Hello world')])

try:
    parse("<unknown/>", registry)
except EmlParseError as err:
    print(err)   # "Invalid element: unknown at 1:..." followed by the line and a caret
```

Every tag must be registered. Pass `validate_style`, a callable taking the
name and value of each `s:` attribute and raising `ValueError` for a bad value,
to have inline styles checked while parsing.

## What it does not do

The package does not build or render widgets, parse stylesheets, or generate
reference documentation; it has no command-line program. `WidgetRegistry`
stores builders and default style sources but leaves calling them, and
parsing the styles (through the `parser` given to `default_styles`), to the
caller.