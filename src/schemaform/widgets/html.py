"""Static HTML rendering of a form.

Each rendered unit is an HTML fragment string. Callbacks are dropped; field
keys become input names and button keys become ``_action`` submit values, so a
host can map a POSTed form back onto the same keys.
"""
import html
from typing import Optional, Sequence

from .base import WidgetKit


def _error_html(error: Optional[str]) -> str:
    if not error:
        return ''
    return f' <small class="error">({html.escape(error)})</small>'


class HtmlKit(WidgetKit):

    def text_input(self, *, key, label, value, on_edit, error=None, options=None,
                   secure=False, autocomplete=None, lines=1) -> str:
        name = html.escape(key, quote=True)
        head = f'<label for="{name}">{html.escape(label)}{_error_html(error)}</label>'
        if options is not None:
            opts = []
            for opt in options:
                text = '' if opt is None else str(opt)
                selected = ' selected' if text == value else ''
                opts.append(f'<option value="{html.escape(text, quote=True)}"{selected}>{html.escape(text)}</option>')
            control = f'<select id="{name}" name="{name}">' + ''.join(opts) + '</select>'
        elif not secure and lines > 1:
            control = f'<textarea id="{name}" name="{name}" rows="{lines}">{html.escape(value)}</textarea>'
        else:
            kind = 'password' if secure else 'text'
            extra = f' autocomplete="{autocomplete}"' if autocomplete else ''
            control = (
                f'<input type="{kind}" id="{name}" name="{name}" '
                f'value="{html.escape(value, quote=True)}"{extra}>'
            )
        return f'<div class="field">{head}{control}</div>'

    def checkbox(self, *, key, label, checked, on_toggle, error=None) -> str:
        name = html.escape(key, quote=True)
        mark = ' checked' if checked else ''
        return (
            f'<div class="field"><label><input type="checkbox" name="{name}"{mark}> '
            f'{html.escape(label)}</label>{_error_html(error)}</div>'
        )

    def button(self, *, key, title, on_press) -> str:
        return (
            f'<button type="submit" name="_action" value="{html.escape(key, quote=True)}">'
            f'{html.escape(title)}</button>'
        )

    def label(self, text, *, key='') -> str:
        return f'<div class="title">{html.escape(text)}</div>'

    def container(self, children: Sequence[Optional[str]], *, key='', row=False) -> str:
        cls = 'row' if row else 'group'
        inner = '\n'.join(c for c in children if c is not None)
        return f'<div class="{cls}">\n{inner}\n</div>'


def render_page(title: str, body: str, action: str = '') -> str:
    """Wrap a rendered form body into a standalone HTML document."""
    t = html.escape(title)
    parts = [f'<html><head><meta charset="utf-8"><title>{t} - Form</title></head><body>']
    parts.append(f'<h1>{t}</h1>')
    parts.append(f'<form method="post" action="{html.escape(action, quote=True)}">')
    parts.append(body)
    parts.append('<div><button type="submit">Save</button></div>')
    parts.append('</form>')
    parts.append('</body></html>')
    return '\n'.join(parts)
