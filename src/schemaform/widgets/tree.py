from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Optional, Sequence

from .base import WidgetKit


@dataclass
class WidgetNode:
    """A rendered unit of the headless kit, with its callbacks still attached."""

    kind: str
    key: str = ''
    label: str = ''
    value: Any = None
    error: Optional[str] = None
    props: dict[str, Any] = field(default_factory=dict)
    children: list['WidgetNode'] = field(default_factory=list)
    on_edit: Optional[Callable[[str], None]] = field(default=None, repr=False)
    on_press: Optional[Callable[[], None]] = field(default=None, repr=False)

    def walk(self) -> Iterator['WidgetNode']:
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, key: str, kind: Optional[str] = None) -> 'WidgetNode':
        """Return the first node with this key (and kind); raise KeyError if absent."""
        for node in self.walk():
            if node.key == key and (kind is None or node.kind == kind):
                return node
        raise KeyError(key)

    def edit(self, text: str) -> None:
        if self.kind not in ('text', 'picker'):
            raise TypeError(f"cannot edit a {self.kind} node")
        if self.on_edit is not None:
            self.on_edit(text)

    def press(self) -> None:
        if self.on_press is not None:
            self.on_press()

    def press_label(self) -> None:
        """Activate the label of a checkbox, which toggles like the box itself."""
        callback = self.props.get('on_label_press')
        if callback is not None:
            callback()

    def errors(self) -> dict[str, str]:
        return {n.key: n.error for n in self.walk() if n.error}


class TreeKit(WidgetKit):
    """Headless kit producing WidgetNode trees.

    The tree keeps every edit callback live, so callers can drive a form the
    same way a user would: find a node and edit, toggle or press it.
    """

    def text_input(self, *, key, label, value, on_edit, error=None, options=None,
                   secure=False, autocomplete=None, lines=1) -> WidgetNode:
        if options is not None:
            return WidgetNode('picker', key, label, value, error,
                              props={'options': list(options)}, on_edit=on_edit)
        return WidgetNode(
            'text', key, label, value, error,
            props={
                'secure': secure,
                'autocomplete': autocomplete,
                'lines': lines,
                'multiline': not secure and lines > 1,
            },
            on_edit=on_edit,
        )

    def checkbox(self, *, key, label, checked, on_toggle, error=None) -> WidgetNode:
        return WidgetNode('checkbox', key, label, checked, error,
                          props={'on_label_press': on_toggle}, on_press=on_toggle)

    def button(self, *, key, title, on_press) -> WidgetNode:
        return WidgetNode('button', key, title, on_press=on_press)

    def label(self, text, *, key='') -> WidgetNode:
        return WidgetNode('label', key, text)

    def container(self, children: Sequence[Any], *, key='', row=False) -> WidgetNode:
        return WidgetNode('container', key, props={'row': row},
                          children=[c for c in children if c is not None])
