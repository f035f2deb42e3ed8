"""Layout defaults and their lookup chain.

Values are resolved per form first (attributes on the form instance, see
:class:`mdbootstrap_form.forms.MDBootstrapFormMixin`), then from the
``MDBOOTSTRAP_FORM`` dictionary in the Django settings and finally from
:data:`DEFAULTS`.
"""

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

SETTINGS_NAME = "MDBOOTSTRAP_FORM"

DEFAULTS = {
    "LABEL_COL_CLASS": "col-form-label col-sm-2",
    "CONTROL_COL_CLASS": "col-sm-10",
    "LABEL_ALIGN_CLASS": "text-sm-right",
    "FORM_GROUP_CLASS": "form-group row",
    "TRANSLATE_ERROR_FUNCTION": None,
}


def get_setting(name):
    if name not in DEFAULTS:
        raise ImproperlyConfigured(f"Unknown {SETTINGS_NAME} setting: {name!r}")
    user_settings = getattr(settings, SETTINGS_NAME, None) or {}
    if not isinstance(user_settings, dict):
        raise ImproperlyConfigured(f"The {SETTINGS_NAME} setting must be a dictionary.")
    return user_settings.get(name, DEFAULTS[name])


def _form_option(form, attr, setting_name):
    value = getattr(form, attr, None)
    if value is None:
        return get_setting(setting_name)
    return value


def label_col_class(form):
    return _form_option(form, "label_col", "LABEL_COL_CLASS")


def control_col_class(form):
    return _form_option(form, "control_col", "CONTROL_COL_CLASS")


def label_align_class(form):
    return _form_option(form, "label_align", "LABEL_ALIGN_CLASS")


def form_group_class(opts=None):
    """Class of the row container; ``opts["form_group"]`` wins over settings."""

    value = (opts or {}).get("form_group")
    if value is None:
        return get_setting("FORM_GROUP_CLASS")
    return value
