import pytest

from schemaform.inputs.composite import append_item, remove_index, replace_index, set_key
from schemaform.schema import UNSET


@pytest.mark.parametrize('key', ['a', 'b', 'c'])
def test_set_key_changes_only_that_key(key):
    value = {'a': {'x': 1}, 'b': [1, 2], 'c': 'text'}
    result = set_key(value, key, lambda prev: ('new', prev))
    assert result is not value
    assert result[key] == ('new', value[key])
    for other in value:
        if other != key:
            assert result[other] is value[other]
    # the original is untouched
    assert value == {'a': {'x': 1}, 'b': [1, 2], 'c': 'text'}


def test_set_key_on_missing_key_sees_unset():
    seen = []
    result = set_key({'a': 1}, 'b', lambda prev: seen.append(prev) or 2)
    assert seen == [UNSET]
    assert result == {'a': 1, 'b': 2}


def test_set_key_unset_result_removes_key():
    assert set_key({'a': 1, 'b': 2}, 'a', lambda prev: UNSET) == {'b': 2}


def test_set_key_none_is_kept():
    assert set_key({'a': 1}, 'a', lambda prev: None) == {'a': None}


def test_set_key_on_absent_parent():
    assert set_key(UNSET, 'a', lambda prev: 1) == {'a': 1}
    assert set_key(None, 'a', lambda prev: 1) == {'a': 1}


@pytest.mark.parametrize('index', [0, 1, 2])
def test_replace_index_changes_only_that_item(index):
    value = [{'n': 0}, {'n': 1}, {'n': 2}]
    result = replace_index(value, index, lambda prev: {'n': prev['n'] * 10})
    assert result[index] == {'n': index * 10}
    for j, item in enumerate(value):
        if j != index:
            assert result[j] is item
    assert [v['n'] for v in value] == [0, 1, 2]


@pytest.mark.parametrize('index', [0, 1, 2])
def test_remove_index_keeps_relative_order(index):
    value = ['a', 'b', 'c']
    result = remove_index(value, index)
    assert len(result) == len(value) - 1
    assert result == [v for j, v in enumerate(value) if j != index]


def test_append_item_adds_unset():
    assert append_item(['b']) == ['b', UNSET]
    assert append_item(UNSET) == [UNSET]
