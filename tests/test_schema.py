import copy

import pytest

from schemaform.schema import UNSET, SchemaConfigError, load_schema, to_plain


def test_load_schema_builds_fragment_tree():
    frag = load_schema({
        '$id': 'person',
        'type': 'object',
        'title': 'Person',
        'properties': {
            'name': {'type': 'string', 'maxLength': 300},
            'tags': {'type': 'array', 'items': {'type': 'string', 'enum': ['a', 'b']}},
        },
    })
    assert frag.type == 'object'
    assert frag.fragment_id == 'person#'
    assert list(frag.properties) == ['name', 'tags']
    assert frag.properties['name'].fragment_id == 'person#/properties/name'
    assert frag.properties['name'].max_length == 300
    tags = frag.properties['tags']
    assert tags.items.fragment_id == 'person#/properties/tags/items'
    assert tags.items.enum == ('a', 'b')


def test_each_load_gets_its_own_ids():
    doc = {'type': 'string'}
    assert load_schema(doc).fragment_id != load_schema(doc).fragment_id


def test_label_falls_back_to_name():
    assert load_schema({'type': 'string'}).label('age') == 'age'
    assert load_schema({'type': 'string', 'title': 'Age'}).label('age') == 'Age'


def test_object_without_properties_has_empty_mapping():
    assert load_schema({'type': 'object'}).properties == {}


@pytest.mark.parametrize('doc', [
    {'title': 'no type'},
    {'type': 'date'},
    {'type': ['string', 'null']},
    {'type': 'array'},
    {'type': 'string', 'properties': {}},
    {'type': 'object', 'items': {'type': 'string'}},
    {'type': 'string', 'maxLength': 'abc'},
    {'type': 'string', 'maxLength': -1},
    {'type': 'string', 'maxLength': True},
    'not a mapping',
])
def test_invalid_fragments_fail_fast(doc):
    with pytest.raises(SchemaConfigError):
        load_schema(doc)


def test_config_error_reports_fragment_path():
    with pytest.raises(SchemaConfigError) as exc:
        load_schema({'$id': 's', 'type': 'object', 'properties': {'bad': {'type': 'array'}}})
    assert exc.value.path == 's#/properties/bad'
    assert 'items' in str(exc.value)


def test_unset_is_a_falsy_singleton():
    assert not UNSET
    assert UNSET is not None
    assert copy.deepcopy(UNSET) is UNSET
    assert repr(UNSET) == 'UNSET'


def test_to_plain_drops_unset_keys_and_nulls_unset_items():
    value = {'a': UNSET, 'b': [UNSET, 1], 'c': {'d': UNSET, 'e': None}}
    assert to_plain(value) == {'b': [None, 1], 'c': {'e': None}}
    assert to_plain(UNSET) is None


def test_bad_max_length_reports_fragment_path():
    with pytest.raises(SchemaConfigError) as exc:
        load_schema({'$id': 's', 'type': 'object', 'properties': {'bio': {'type': 'string', 'maxLength': 'abc'}}})
    assert exc.value.path == 's#/properties/bio'
    assert 'maxLength' in str(exc.value)
