"""Validator adapter and error resolver.

Fragments are compiled once with jsonschema and cached per fragment object;
each validation returns the violations in the order the validator reports
them (schema declaration order).
"""
from __future__ import annotations

import logging
import math
import weakref
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from jsonschema import Draft7Validator, FormatChecker
from jsonschema.validators import extend

from .schema import SchemaFragment, to_plain

logger = logging.getLogger(__name__)

ERROR_MESSAGE_KEYWORD = 'errorMessage'

ERROR_MESSAGES: dict[str, str] = {
    'minLength': 'Too short',
    'maxLength': 'Too long',
    'minimum': 'Too small',
    'maximum': 'Too large',
    'required': 'Required',
    'type': 'Required',
    'pattern': 'Invalid',
    'format': 'Invalid',
    'enum': 'Invalid',
    'default': 'Invalid',
}


def _is_finite_number(checker, instance) -> bool:
    return Draft7Validator.TYPE_CHECKER.is_type(instance, 'number') and math.isfinite(instance)


def _is_finite_integer(checker, instance) -> bool:
    return Draft7Validator.TYPE_CHECKER.is_type(instance, 'integer') and math.isfinite(instance)


# nan/inf are never numbers here, so unparseable text in a number field fails `type`
FormValidator = extend(
    Draft7Validator,
    type_checker=Draft7Validator.TYPE_CHECKER.redefine_many({
        'number': _is_finite_number,
        'integer': _is_finite_integer,
    }),
)


@dataclass(frozen=True)
class FieldError:
    keyword: str
    message: str
    path: str = ''


def _apply_error_messages(errors: list[FieldError], directive: Any) -> list[FieldError]:
    if not errors or directive is None:
        return errors
    if isinstance(directive, str):
        return [FieldError(ERROR_MESSAGE_KEYWORD, directive, errors[0].path)]
    if isinstance(directive, Mapping):
        fallback = directive.get('_')
        out = []
        for err in errors:
            text = directive.get(err.keyword, fallback)
            out.append(FieldError(ERROR_MESSAGE_KEYWORD, text, err.path) if text is not None else err)
        return out
    return errors


class ValidatorCache:
    """Compiled validators keyed by fragment identity.

    Keys are the SchemaFragment objects themselves, held weakly: an entry lives
    as long as its fragment and is never invalidated otherwise. Two loads of
    the same document (or of documents sharing an $id) never share an entry.
    """

    def __init__(self, format_checker: Optional[FormatChecker] = None):
        self._compiled: weakref.WeakKeyDictionary[SchemaFragment, Any] = weakref.WeakKeyDictionary()
        self._format_checker = format_checker or FormatChecker()

    def __len__(self) -> int:
        return len(self._compiled)

    def __contains__(self, fragment: SchemaFragment) -> bool:
        return fragment in self._compiled

    def compile(self, fragment: SchemaFragment):
        """Return the compiled validator for a fragment, compiling on first use."""
        compiled = self._compiled.get(fragment)
        if compiled is None:
            logger.debug(f"Compiling validator for {fragment.fragment_id}")
            compiled = FormValidator(dict(fragment.raw), format_checker=self._format_checker)
            self._compiled[fragment] = compiled
        return compiled

    def validate(self, fragment: SchemaFragment, value: Any) -> list[FieldError]:
        """Validate value against fragment, returning violations in validator order."""
        validator = self.compile(fragment)
        errors = [
            FieldError(err.validator, err.message, '/'.join(str(p) for p in err.absolute_path))
            for err in validator.iter_errors(to_plain(value))
        ]
        return _apply_error_messages(errors, fragment.raw.get(ERROR_MESSAGE_KEYWORD))

    def clear(self) -> None:
        self._compiled.clear()


def resolve_error(errors: list[FieldError], messages: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Map the first violation to a short message, or None when there is none.

    `errorMessage` violations pass their text through verbatim; everything else
    goes through the keyword table, falling back to its `default` entry.
    """
    if not errors:
        return None
    first = errors[0]
    if first.keyword == ERROR_MESSAGE_KEYWORD:
        return first.message
    table = {**ERROR_MESSAGES, **(messages or {})}
    return table.get(first.keyword, table['default'])


_default_cache: ValidatorCache | None = None


def get_default_cache() -> ValidatorCache:
    """Get or create the process-wide validator cache."""
    global _default_cache
    if _default_cache is None:
        _default_cache = ValidatorCache()
    return _default_cache
