"""Widget kits the form renders through."""
from .base import WidgetKit
from .html import HtmlKit, render_page
from .tree import TreeKit, WidgetNode

__all__ = [
    'WidgetKit',
    'HtmlKit',
    'TreeKit',
    'WidgetNode',
    'render_page',
]
