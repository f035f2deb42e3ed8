"""Surfacing of field validation errors produced by Django's form layer."""

from __future__ import annotations

import logging

from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from .conf import get_setting

logger = logging.getLogger(__name__)

INVALID_CLASS = "is-invalid"


def default_translate_error(message, params=None) -> str:
    """Interpolate ``params`` into ``message`` the way ``ValidationError`` does."""

    # Plural lazy messages pick their form from params, so interpolate first.
    if params:
        return str(message % params)
    return str(message)


def get_translate_error_function():
    path = get_setting("TRANSLATE_ERROR_FUNCTION")
    if not path:
        return default_translate_error
    if callable(path):
        return path
    try:
        func = import_string(path)
    except ImportError as exc:
        raise ImproperlyConfigured(
            f"TRANSLATE_ERROR_FUNCTION {path!r} could not be imported: {exc}"
        ) from exc
    logger.debug("Using %s to translate form errors", path)
    return func


def translate_error(message, params=None) -> str:
    return get_translate_error_function()(message, params)


def has_error(form, field: str) -> bool:
    errors = getattr(form, "errors", None)
    if not errors:
        return False
    return field in errors


def get_error(form, field: str):
    """Return the first error of ``field`` translated, or ``None``."""

    if not has_error(form, field):
        return None
    error = form.errors.as_data()[field][0]
    return translate_error(error.message, error.params)


def is_valid_class(form, field: str) -> str:
    return INVALID_CLASS if has_error(form, field) else ""
