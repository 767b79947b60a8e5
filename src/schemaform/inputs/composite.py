"""Object and array inputs, and the copy-on-write helpers they update through.

Every helper returns a new container and leaves untouched entries as the
very same objects.
"""
from typing import Any, Optional

from ..buffered import Update
from ..schema import UNSET, SchemaConfigError
from .base import Field, InputRenderer, OnChange, RenderContext


def set_key(prev: Any, key: str, update: Update) -> dict:
    """Copy of prev with prev[key] replaced by update(prev[key]); UNSET removes the key."""
    base = prev if isinstance(prev, dict) else {}
    result = update(base.get(key, UNSET))
    out = dict(base)
    if result is UNSET:
        out.pop(key, None)
    else:
        out[key] = result
    return out


def replace_index(prev: Any, index: int, update: Update) -> list:
    items = prev if isinstance(prev, list) else []
    return [update(item) if i == index else item for i, item in enumerate(items)]


def remove_index(prev: Any, index: int) -> list:
    items = prev if isinstance(prev, list) else []
    return [item for i, item in enumerate(items) if i != index]


def append_item(prev: Any, item: Any = UNSET) -> list:
    items = prev if isinstance(prev, list) else []
    return [*items, item]


class ObjectInput(InputRenderer):
    """Renders each declared property in declaration order.

    Keys outside the schema are not rendered but survive edits.
    """

    types = ('object',)

    def render(self, ctx: RenderContext, field: Field) -> Any:
        schema = field.schema
        value = field.value if isinstance(field.value, dict) else {}
        children = []
        if schema.title:
            children.append(ctx.kit.label(schema.title, key=f"{field.key}:title"))
        for key, child_schema in (schema.properties or {}).items():
            child = field.child(key, child_schema, value.get(key, UNSET), self._key_change(field, key))
            children.append(ctx.dispatch(child))
        return ctx.kit.container(children, key=field.key)

    @staticmethod
    def _key_change(field: Field, key: str) -> Optional[OnChange]:
        if field.on_change is None:
            return None
        return lambda update: field.on_change(lambda prev: set_key(prev, key, update))


class ArrayInput(InputRenderer):
    """One row per item with a remove button, then an append button.

    Rows are identified by index only.
    """

    types = ('array',)

    def render(self, ctx: RenderContext, field: Field) -> Any:
        schema = field.schema
        if schema.items is None:
            raise SchemaConfigError("array fragment has no 'items'", schema.fragment_id)
        items = field.value if isinstance(field.value, list) else []
        editable = field.on_change is not None

        children = [ctx.kit.label(field.label, key=f"{field.key}:title")]
        for index, item in enumerate(items):
            child = field.child(str(index), schema.items, item,
                                self._index_change(field, index) if editable else None)
            remove = ctx.kit.button(
                key=f"{child.key}:remove",
                title='-',
                on_press=self._remover(field, index) if editable else None,
            )
            children.append(ctx.kit.container([ctx.dispatch(child), remove], key=f"{child.key}:row", row=True))
        children.append(ctx.kit.button(
            key=f"{field.key}:append",
            title='+',
            on_press=(lambda: field.propose(append_item)) if editable else None,
        ))
        return ctx.kit.container(children, key=field.key)

    @staticmethod
    def _index_change(field: Field, index: int) -> OnChange:
        return lambda update: field.propose(lambda prev: replace_index(prev, index, update))

    @staticmethod
    def _remover(field: Field, index: int):
        return lambda: field.propose(lambda prev: remove_index(prev, index))


class NullInput(InputRenderer):
    types = ('null',)

    def render(self, ctx: RenderContext, field: Field) -> Any:
        return None
