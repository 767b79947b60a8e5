import os
import tomllib
from pathlib import Path
from typing import Any, Optional

import tomli_w


DEFAULT_DEBOUNCE_MS = 300
DEFAULT_LINE_CHARS = 128


def _config_file_path() -> Path:
    xdg = os.getenv('XDG_CONFIG_HOME')
    if xdg:
        base = Path(xdg)
    else:
        base = Path.home() / '.config'
    return base / 'schemaform' / 'config.toml'


def load_config() -> dict[str, Any]:
    """Load TOML configuration from XDG config path. Returns empty dict on error."""
    p = _config_file_path()
    if not p.exists():
        return {}
    try:
        with p.open('rb') as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(cfg: dict[str, Any]) -> bool:
    """Save a config dict to the XDG config TOML file.

    Returns True on success, False on IO or serialization errors.
    """
    p = _config_file_path()
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        dumped = tomli_w.dumps(cfg)
        with p.open('w', encoding='utf8') as f:
            f.write(dumped)
        return True
    except (OSError, TypeError, ValueError):
        return False


_ALLOWED_KEYS = {
    'debounce_ms': int,
    'line_chars': int,
}

_CODE_DEFAULTS = {
    'debounce_ms': DEFAULT_DEBOUNCE_MS,
    'line_chars': DEFAULT_LINE_CHARS,
}


def get_allowed_keys() -> dict:
    return _ALLOWED_KEYS.copy()


def _get_int(key: str, default: Optional[int]) -> Optional[int]:
    """Precedence: environment SCHEMAFORM_<KEY> > config file > default."""
    env = os.getenv('SCHEMAFORM_' + key.upper())
    if env:
        try:
            return int(env)
        except ValueError:
            pass

    v = load_config().get(key)
    if v is not None:
        try:
            return int(v)
        except (TypeError, ValueError):
            return default

    return default


def get_debounce_ms(default: int = DEFAULT_DEBOUNCE_MS) -> int:
    value = _get_int('debounce_ms', default)
    return value if value is not None and value >= 0 else default


def get_line_chars(default: int = DEFAULT_LINE_CHARS) -> int:
    value = _get_int('line_chars', default)
    return value if value is not None and value > 0 else default


def set_config_value(key: str, value: Any) -> bool:
    """Set a single config key (with validation) and persist it.

    Returns True on success, False on validation or IO errors.
    """
    if key not in _ALLOWED_KEYS:
        return False
    try:
        cast_v = _ALLOWED_KEYS[key](value)
    except (TypeError, ValueError):
        return False
    if cast_v < 0 or (key == 'line_chars' and cast_v == 0):
        return False

    cfg = load_config()
    cfg[key] = cast_v
    return save_config(cfg)


def get_effective_value(key: str) -> dict[str, Any] | None:
    """Return a dict with env/config/code default/effective for a key.

    Returns None if key is not allowed.
    """
    if key not in _ALLOWED_KEYS:
        return None

    env = os.getenv('SCHEMAFORM_' + key.upper())
    cfg_val = load_config().get(key)
    code_default = _CODE_DEFAULTS[key]
    effective = get_debounce_ms() if key == 'debounce_ms' else get_line_chars()
    return {'env': env, 'config': cfg_val, 'code_default': code_default, 'effective': effective}


def get_error_messages() -> dict[str, str]:
    """Return the `[messages]` table: error-resolver overrides keyed by keyword."""
    messages = load_config().get('messages') or {}
    if not isinstance(messages, dict):
        return {}
    return {str(k): str(v) for k, v in messages.items()}


def set_error_message(keyword: str, text: str) -> bool:
    """Persist an override for the message shown for a validation keyword."""
    if not keyword or not text:
        return False
    cfg = load_config()
    messages = cfg.get('messages') or {}
    if not isinstance(messages, dict):
        messages = {}
    messages[keyword] = text
    cfg['messages'] = messages
    return save_config(cfg)
