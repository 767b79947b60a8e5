from schemaform.config import (
    _config_file_path,
    get_debounce_ms,
    get_effective_value,
    get_error_messages,
    get_line_chars,
    load_config,
    set_config_value,
    set_error_message,
)
from schemaform.form import JsonSchemaForm


def _write_config(text):
    path = _config_file_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


def test_defaults_without_config_file():
    assert load_config() == {}
    assert get_debounce_ms() == 300
    assert get_line_chars() == 128
    assert get_error_messages() == {}


def test_debounce_from_xdg(isolated_config):
    path = _write_config('debounce_ms = 50\n')
    assert path == isolated_config / 'schemaform' / 'config.toml'
    assert get_debounce_ms() == 50


def test_env_overrides_config(monkeypatch):
    _write_config('line_chars = 40\n')
    monkeypatch.setenv('SCHEMAFORM_LINE_CHARS', '64')
    assert get_line_chars() == 64


def test_bad_env_value_falls_back_to_config(monkeypatch):
    _write_config('debounce_ms = 10\n')
    monkeypatch.setenv('SCHEMAFORM_DEBOUNCE_MS', 'soon')
    assert get_debounce_ms() == 10


def test_broken_toml_is_ignored():
    _write_config('debounce_ms = [\n')
    assert load_config() == {}
    assert get_debounce_ms() == 300


def test_set_config_value_persists():
    assert set_config_value('debounce_ms', '120') is True
    assert load_config() == {'debounce_ms': 120}
    assert get_debounce_ms() == 120


def test_set_config_value_rejects_invalid():
    assert set_config_value('debounce_ms', 'fast') is False
    assert set_config_value('debounce_ms', -1) is False
    assert set_config_value('line_chars', 0) is False
    assert set_config_value('theme', 'dark') is False
    assert load_config() == {}


def test_get_effective_value(monkeypatch):
    _write_config('debounce_ms = 200\n')
    monkeypatch.setenv('SCHEMAFORM_DEBOUNCE_MS', '10')
    eff = get_effective_value('debounce_ms')
    assert eff == {'env': '10', 'config': 200, 'code_default': 300, 'effective': 10}
    assert get_effective_value('theme') is None


def test_error_message_overrides():
    assert set_error_message('maximum', 'Way too big') is True
    assert set_error_message('', 'x') is False
    assert get_error_messages() == {'maximum': 'Way too big'}
    # other config keys survive
    set_config_value('line_chars', 80)
    assert load_config()['messages'] == {'maximum': 'Way too big'}


def test_form_uses_configured_messages_and_delay():
    set_error_message('maximum', 'Way too big')
    set_config_value('debounce_ms', 50)
    schema = {'type': 'object', 'properties': {'age': {'type': 'number', 'maximum': 10}}}
    form = JsonSchemaForm('f', schema, {'age': 11})
    assert form.render().find('age').error == 'Way too big'
    assert form.ctx.delay == 0.05
