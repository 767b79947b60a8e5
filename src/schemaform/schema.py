from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

_schema_ids = itertools.count(1)

JSON_TYPES = ('string', 'number', 'integer', 'boolean', 'object', 'array', 'null')


class _Unset:
    """Marker for an absent value (a missing key or a freshly appended item)."""

    _instance: Optional['_Unset'] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return 'UNSET'

    def __reduce__(self):
        return (_Unset, ())


UNSET: Any = _Unset()


class SchemaConfigError(ValueError):
    """Raised when a schema fragment cannot be rendered (bad or missing type, no items)."""

    def __init__(self, message: str, path: str = '#'):
        super().__init__(f"{path}: {message}")
        self.path = path


@dataclass(frozen=True, eq=False)
class SchemaFragment:
    type: str
    fragment_id: str
    raw: Mapping[str, Any] = field(repr=False)
    title: Optional[str] = None
    enum: Optional[tuple] = None
    format: Optional[str] = None
    max_length: Optional[int] = None
    properties: Optional[dict[str, 'SchemaFragment']] = None
    items: Optional['SchemaFragment'] = None

    def label(self, name: str) -> str:
        return self.title if self.title is not None else name


def _pointer_escape(key: str) -> str:
    return key.replace('~', '~0').replace('/', '~1')


def load_schema(document: Mapping[str, Any], schema_id: Optional[str] = None) -> SchemaFragment:
    """Build an immutable SchemaFragment tree from a JSON schema document.

    Every fragment gets a stable id, `<schema_id>#<json pointer>`, which the
    validator cache keys on. `schema_id` defaults to the document's `$id`, or
    a fresh `schema-N` per load. Raises SchemaConfigError on a missing or
    unknown `type`, on `properties` outside an object, and on an array
    without `items`.
    """
    if schema_id is None:
        schema_id = document.get('$id') if isinstance(document, Mapping) else None
    if not schema_id:
        schema_id = f"schema-{next(_schema_ids)}"
    return _load(document, f"{schema_id}#")


def _load(document: Mapping[str, Any], fragment_id: str) -> SchemaFragment:
    if not isinstance(document, Mapping):
        raise SchemaConfigError('schema fragment must be an object', fragment_id)

    t = document.get('type')
    if not isinstance(t, str):
        raise SchemaConfigError(f"missing or non-string 'type' ({t!r})", fragment_id)
    if t not in JSON_TYPES:
        raise SchemaConfigError(f"unknown type '{t}'", fragment_id)

    properties = None
    if 'properties' in document:
        if t != 'object':
            raise SchemaConfigError("'properties' is only allowed on object fragments", fragment_id)
        props = document['properties']
        if not isinstance(props, Mapping):
            raise SchemaConfigError("'properties' must be a mapping", fragment_id)
        properties = {
            key: _load(child, f"{fragment_id}/properties/{_pointer_escape(key)}")
            for key, child in props.items()
        }
    elif t == 'object':
        properties = {}

    items = None
    if t == 'array':
        if 'items' not in document:
            raise SchemaConfigError("array fragment has no 'items'", fragment_id)
        items = _load(document['items'], f"{fragment_id}/items")
    elif 'items' in document:
        raise SchemaConfigError("'items' is only allowed on array fragments", fragment_id)

    enum = document.get('enum')
    max_length = document.get('maxLength')
    if max_length is not None and (
        isinstance(max_length, bool) or not isinstance(max_length, int) or max_length < 0
    ):
        raise SchemaConfigError(f"'maxLength' must be a non-negative integer ({max_length!r})", fragment_id)

    return SchemaFragment(
        type=t,
        fragment_id=fragment_id,
        raw=document,
        title=document.get('title'),
        enum=tuple(enum) if enum is not None else None,
        format=document.get('format'),
        max_length=max_length,
        properties=properties,
        items=items,
    )


def to_plain(value: Any) -> Any:
    """Convert an engine value to plain JSON data.

    UNSET object entries are dropped; UNSET array items (and a top-level
    UNSET) become None.
    """
    if value is UNSET:
        return None
    if isinstance(value, dict):
        return {k: to_plain(v) for k, v in value.items() if v is not UNSET}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    return value
