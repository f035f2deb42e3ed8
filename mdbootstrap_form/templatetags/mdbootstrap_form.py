"""Template tags exposing the Material Design Bootstrap field helpers.

Load the library and call the tag matching the control you want::

    {% load mdbootstrap_form %}
    {% mdb_text_input form "value" label_text="Custom" help="Help text" %}
    {% mdb_text_input form "price" prepend="$" append=".00" %}
    {% mdb_radio_buttons form "color" colors inline=True %}
    {% mdb_submit form "Smash" class="btn-primary" alternative=cancel_link %}

Keyword arguments are flattened versions of the option dictionaries taken by
:mod:`mdbootstrap_form.helpers`: ``label_text``, ``label_show`` and
``label_class`` configure the label, ``help``, ``prepend``, ``append``,
``inline`` and ``input_class`` configure the control and ``form_group``
replaces the row class.  Every other keyword becomes an attribute of the input
element, with underscores turned into dashes (``aria_label`` ->
``aria-label``).
"""

from __future__ import annotations

from django import template

from mdbootstrap_form import helpers

register = template.Library()

LABEL_OPTIONS = {"label_text": "text", "label_show": "show", "label_class": "class"}
INPUT_OPTIONS = {"input_class": "class", "help": "help", "prepend": "prepend", "append": "append", "inline": "inline"}

SIMPLE_FIELD_TAGS = [
    "text_input",
    "file_input",
    "email_input",
    "password_input",
    "textarea",
    "telephone_input",
    "number_input",
    "time_select",
    "date_select",
    "datetime_select",
    "checkbox",
]


def split_options(options: dict) -> dict:
    """Turn flat template keyword arguments into the helpers' option dictionaries."""

    label_opts: dict = {}
    input_opts: dict = {}
    form_group = None
    for key, value in options.items():
        if key == "form_group":
            form_group = value
        elif key in LABEL_OPTIONS:
            label_opts[LABEL_OPTIONS[key]] = value
        elif key in INPUT_OPTIONS:
            input_opts[INPUT_OPTIONS[key]] = value
        else:
            input_opts[key.replace("_", "-")] = value
    return {"label_opts": label_opts, "input_opts": input_opts, "form_group": form_group}


def _field_tag(helper):
    def render(form, field, **options):
        return helper(form, field, **split_options(options))

    render.__doc__ = helper.__doc__
    return render


for _name in SIMPLE_FIELD_TAGS:
    register.simple_tag(_field_tag(getattr(helpers, _name)), name=f"mdb_{_name}")


@register.simple_tag
def mdb_select(form, field, options=None, **kwargs):
    return helpers.select(form, field, options, **split_options(kwargs))


@register.simple_tag
def mdb_multiple_select(form, field, options=None, **kwargs):
    return helpers.multiple_select(form, field, options, **split_options(kwargs))


@register.simple_tag
def mdb_checkboxes(form, field, values=None, selected=None, **kwargs):
    return helpers.checkboxes(form, field, values, selected, **split_options(kwargs))


@register.simple_tag
def mdb_radio_buttons(form, field, values=None, **kwargs):
    return helpers.radio_buttons(form, field, values, **split_options(kwargs))


@register.simple_tag
def mdb_submit(form, label=None, alternative="", form_group=None, **attrs):
    """Render the submit row; extra keywords become button attributes."""
    attrs = {key.replace("_", "-"): value for key, value in attrs.items()}
    return helpers.submit(form, label, alternative=alternative, form_group=form_group, **attrs)


@register.simple_tag
def mdb_static(form, label, content):
    return helpers.static(form, label, content)


@register.simple_tag
def mdb_field(form, field, **kwargs):
    """Render ``field`` with the helper matching its widget."""
    return helpers.field(form, field, **split_options(kwargs))


@register.simple_tag
def mdb_form(form, form_group=None):
    """Render every field of ``form``."""
    return helpers.form_fields(form, form_group=form_group)
