import gc
import math

from schemaform.form import collect_errors
from schemaform.schema import UNSET, load_schema
from schemaform.validation import (
    ERROR_MESSAGES,
    FieldError,
    ValidatorCache,
    get_default_cache,
    resolve_error,
)


def test_validator_compiled_once_per_fragment():
    cache = ValidatorCache()
    frag = load_schema({'type': 'number', 'maximum': 10})
    first = cache.compile(frag)
    cache.validate(frag, 1)
    cache.validate(frag, 20)
    assert cache.compile(frag) is first
    assert len(cache) == 1
    assert frag in cache


def test_structurally_equal_fragments_from_separate_loads_compile_separately():
    cache = ValidatorCache()
    doc = {'type': 'string'}
    cache.validate(load_schema(doc), 'x')
    cache.validate(load_schema(doc), 'y')
    assert len(cache) == 2


def test_errors_follow_schema_declaration_order():
    cache = ValidatorCache()
    frag = load_schema({'type': 'string', 'minLength': 5, 'pattern': '^[0-9]+$'})
    errors = cache.validate(frag, 'ab')
    assert [e.keyword for e in errors] == ['minLength', 'pattern']
    assert resolve_error(errors) == 'Too short'


def test_valid_value_has_no_error():
    cache = ValidatorCache()
    frag = load_schema({'type': 'number', 'minimum': 1, 'maximum': 100})
    assert cache.validate(frag, 50) == []
    assert resolve_error([]) is None


def test_keyword_messages():
    cache = ValidatorCache()
    frag = load_schema({'type': 'number', 'minimum': 1, 'maximum': 100})
    assert resolve_error(cache.validate(frag, 200)) == 'Too large'
    assert resolve_error(cache.validate(frag, 0)) == 'Too small'
    assert resolve_error(cache.validate(frag, None)) == 'Required'


def test_unset_validates_as_missing():
    cache = ValidatorCache()
    errors = cache.validate(load_schema({'type': 'string'}), UNSET)
    assert errors[0].keyword == 'type'
    assert resolve_error(errors) == 'Required'


def test_unmapped_keyword_uses_default_message():
    cache = ValidatorCache()
    errors = cache.validate(load_schema({'type': 'string', 'const': 'x'}), 'y')
    assert errors[0].keyword == 'const'
    assert resolve_error(errors) == ERROR_MESSAGES['default']


def test_format_is_checked():
    cache = ValidatorCache()
    errors = cache.validate(load_schema({'type': 'string', 'format': 'email'}), 'nope')
    assert errors[0].keyword == 'format'
    assert resolve_error(errors) == 'Invalid'


def test_nan_is_not_a_number():
    cache = ValidatorCache()
    assert cache.validate(load_schema({'type': 'number'}), math.nan)[0].keyword == 'type'
    assert cache.validate(load_schema({'type': 'integer'}), math.nan)[0].keyword == 'type'
    assert cache.validate(load_schema({'type': 'integer'}), 3) == []


def test_error_message_string_replaces_all_errors():
    cache = ValidatorCache()
    frag = load_schema({'type': 'number', 'minimum': 1, 'errorMessage': 'Pick a positive number'})
    errors = cache.validate(frag, 0)
    assert errors == [FieldError('errorMessage', 'Pick a positive number', '')]
    assert resolve_error(errors) == 'Pick a positive number'
    assert cache.validate(frag, 5) == []


def test_error_message_mapping_replaces_named_keywords_only():
    cache = ValidatorCache()
    frag = load_schema({'type': 'string', 'minLength': 3, 'errorMessage': {'minLength': 'At least 3'}})
    assert resolve_error(cache.validate(frag, 'a')) == 'At least 3'
    assert resolve_error(cache.validate(frag, None)) == 'Required'


def test_error_message_mapping_fallback_entry():
    cache = ValidatorCache()
    frag = load_schema({'type': 'string', 'errorMessage': {'_': 'Please fill in'}})
    assert resolve_error(cache.validate(frag, None)) == 'Please fill in'


def test_message_overrides():
    errors = [FieldError('maximum', 'x is too big')]
    assert resolve_error(errors, {'maximum': 'Way too big'}) == 'Way too big'
    assert resolve_error([FieldError('dependencies', '')], {'default': 'Nope'}) == 'Nope'


def test_default_cache_is_shared():
    assert get_default_cache() is get_default_cache()


def test_documents_sharing_an_id_do_not_share_validators():
    strict = {'$id': 'x', 'type': 'object', 'properties': {'a': {'type': 'string', 'maxLength': 1}}}
    loose = {'$id': 'x', 'type': 'object', 'properties': {'a': {'type': 'string'}}}
    assert collect_errors(strict, {'a': 'xx'}) == {'a': 'Too long'}
    assert collect_errors(loose, {'a': 'xx'}) == {}


def test_cache_entries_are_released_with_their_fragments():
    cache = ValidatorCache()
    frag = load_schema({'type': 'string'})
    cache.validate(frag, 'a')
    assert len(cache) == 1
    del frag
    gc.collect()
    assert len(cache) == 0


def test_default_cache_does_not_grow_across_forms():
    schema = {'type': 'object', 'properties': {'a': {'type': 'number'}, 'b': {'type': 'string'}}}
    gc.collect()
    baseline = len(get_default_cache())
    for _ in range(50):
        collect_errors(schema, {'a': 1, 'b': 'x'})
    gc.collect()
    assert len(get_default_cache()) == baseline
