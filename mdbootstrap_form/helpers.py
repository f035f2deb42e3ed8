"""Material Design Bootstrap renderers for Django form fields.

Each public function takes a form, a field (name or ``BoundField``) and a few
option dictionaries and returns a safe string with the horizontal-form markup:

.. code-block:: html

    <div class="form-group row">
      <label class="col-form-label col-sm-2 text-sm-right" for="id_value">Value</label>
      <div class="col-sm-10">
        <input class="form-control" id="id_value" name="value" type="text">
      </div>
    </div>

``label_opts`` accepts ``text``, ``show`` and ``class`` plus any other label
attribute.  ``input_opts`` accepts ``class``, ``help``, ``prepend``,
``append`` and ``inline`` plus any other attribute of the input element.
"""

from __future__ import annotations

import copy
import logging
import re

from django import forms
from django.forms.boundfield import BoundField
from django.forms.utils import pretty_name
from django.utils.safestring import mark_safe
from django.utils.translation import gettext

from . import conf
from .errors import get_error, is_valid_class
from .forms import TelephoneInput
from .html import content_tag, css_class, join, merge_attrs, tag

logger = logging.getLogger(__name__)

INPUT_WIDGETS = {
    "text_input": forms.TextInput,
    "file_input": forms.FileInput,
    "email_input": forms.EmailInput,
    "password_input": forms.PasswordInput,
    "textarea": forms.Textarea,
    "telephone_input": TelephoneInput,
    "number_input": forms.NumberInput,
    "select": forms.Select,
    "multiple_select": forms.SelectMultiple,
}

WHITESPACE = re.compile(r"\s")

PICKERS = {
    "time_select": ("fa-clock", "time-picker"),
    "date_select": ("fa-calendar", "date-picker"),
    "datetime_select": ("fa-calendar", "date-time-picker"),
}


def _bound_field(form, field) -> BoundField:
    if isinstance(field, BoundField):
        return field
    return form[field]


def _select_choices(bound_field, options):
    if options is None:
        if hasattr(bound_field.field, "choices"):
            return list(bound_field.field.choices)
        # Keep whatever choices the field's widget carries, e.g. NullBooleanSelect.
        return None
    choices = []
    for option in options:
        if isinstance(option, (list, tuple)):
            choices.append(tuple(option))
        else:
            choices.append((option, option))
    return choices


def _labelled_values(values):
    if not isinstance(values, (list, tuple)):
        raise TypeError(f"values must be a list or tuple, got {type(values).__name__}")
    labelled = []
    for value in values:
        if isinstance(value, (list, tuple)) and isinstance(value[1], (list, tuple)):
            # Optgroup: keep the options, drop the group header.
            labelled.extend(_labelled_values(value[1]))
        elif isinstance(value, (list, tuple)):
            labelled.append((value[0], value[1]))
        else:
            labelled.append((value, pretty_name(str(value))))
    return labelled


def _build_widget(kind, bound_field, choices=None):
    if kind is None:
        return None
    widget_class = INPUT_WIDGETS[kind]
    field_widget = bound_field.field.widget
    # A field widget of the requested type is reused; a plain select never
    # borrows a multiple one.
    if isinstance(field_widget, widget_class) and not (
        kind == "select" and field_widget.allow_multiple_selected
    ):
        widget = copy.deepcopy(field_widget)
    else:
        widget = widget_class()
    if choices is not None:
        widget.choices = choices
    return widget


def _draw_input(kind, bound_field, attrs, choices=None):
    return bound_field.as_widget(widget=_build_widget(kind, bound_field, choices), attrs=attrs)


def _draw_label(form, bound_field, label_opts=None, span=False):
    label_opts = dict(label_opts or {})
    if not label_opts.pop("show", True):
        return content_tag("span", "")

    text = label_opts.pop("text", None)
    if text is None:
        text = bound_field.label
    attrs = merge_attrs(
        {"class": css_class(conf.label_col_class(form), conf.label_align_class(form))},
        label_opts,
    )
    if span:
        return content_tag("span", text, **attrs)
    if not text:
        # label_tag would fall back to the field label.
        return content_tag("label", "", for_=bound_field.id_for_label or None, **attrs)
    return bound_field.label_tag(text, attrs=attrs, label_suffix="")


def _draw_addon(position, content):
    if content is None:
        return ""
    text = content_tag("span", content, class_="input-group-text")
    return content_tag("div", text, class_=f"input-group-{position}")


def _draw_input_group(input_html, prepend=None, append=None):
    if prepend is None and append is None:
        return input_html
    return content_tag(
        "div",
        [_draw_addon("prepend", prepend), input_html, _draw_addon("append", append)],
        class_="input-group",
    )


def _draw_help(bound_field, help_text):
    if help_text is None:
        # Django treats help_text declared on the field as safe.
        help_text = mark_safe(bound_field.help_text) if bound_field.help_text else None
    if not help_text:
        return ""
    help_id = f"{bound_field.id_for_label}_helptext" if bound_field.id_for_label else None
    return content_tag("small", help_text, class_="form-text text-muted", id=help_id)


def _draw_error_message(message):
    if message is None:
        return ""
    return content_tag("div", message, class_="invalid-feedback")


def _draw_form_group(label, content, opts=None):
    return content_tag("div", [label, content], class_=conf.form_group_class(opts))


def _draw_form_check(input_html, label, for_attr, error, inline=False):
    label = content_tag("label", label, for_=for_attr, class_="form-check-label")
    return content_tag(
        "div",
        [input_html, label, error],
        class_=css_class("form-check", "form-check-inline" if inline else ""),
    )


def _input_attrs(form, bound_field, base_class, input_opts):
    attrs = merge_attrs(
        bound_field.field.widget.attrs,
        {"class": css_class(base_class, is_valid_class(form, bound_field.name))},
    )
    return merge_attrs(attrs, input_opts)


def _draw_control(kind, form, bound_field, choices, input_opts):
    input_opts = dict(input_opts or {})
    prepend = input_opts.pop("prepend", None)
    append = input_opts.pop("append", None)
    help_text = input_opts.pop("help", None)
    input_opts.pop("inline", None)

    is_file = kind == "file_input"
    attrs = _input_attrs(
        form, bound_field, "custom-file-input" if is_file else "form-control", input_opts
    )
    input_html = _draw_input_group(
        _draw_input(kind, bound_field, attrs, choices), prepend, append
    )
    error = _draw_error_message(get_error(form, bound_field.name))
    help_html = _draw_help(bound_field, help_text)

    if is_file:
        file_label = content_tag("label", "", class_="custom-file-label")
        return content_tag(
            "div",
            [input_html, file_label, error, help_html],
            class_=css_class("custom-file", conf.control_col_class(form)),
        )
    return content_tag(
        "div", [input_html, error, help_html], class_=conf.control_col_class(form)
    )


def _draw_generic_input(kind, form, field, choices=None, label_opts=None, input_opts=None, form_group=None):
    bound_field = _bound_field(form, field)
    return _draw_form_group(
        _draw_label(form, bound_field, label_opts),
        _draw_control(kind, form, bound_field, choices, input_opts),
        {"form_group": form_group},
    )


def text_input(form, field, label_opts=None, input_opts=None, form_group=None):
    """Creates a text field."""
    return _draw_generic_input("text_input", form, field, None, label_opts, input_opts, form_group)


def file_input(form, field, label_opts=None, input_opts=None, form_group=None):
    """Creates a file field using the ``custom-file`` markup."""
    return _draw_generic_input("file_input", form, field, None, label_opts, input_opts, form_group)


def email_input(form, field, label_opts=None, input_opts=None, form_group=None):
    return _draw_generic_input("email_input", form, field, None, label_opts, input_opts, form_group)


def password_input(form, field, label_opts=None, input_opts=None, form_group=None):
    return _draw_generic_input("password_input", form, field, None, label_opts, input_opts, form_group)


def textarea(form, field, label_opts=None, input_opts=None, form_group=None):
    return _draw_generic_input("textarea", form, field, None, label_opts, input_opts, form_group)


def telephone_input(form, field, label_opts=None, input_opts=None, form_group=None):
    return _draw_generic_input("telephone_input", form, field, None, label_opts, input_opts, form_group)


def number_input(form, field, label_opts=None, input_opts=None, form_group=None):
    return _draw_generic_input("number_input", form, field, None, label_opts, input_opts, form_group)


def select(form, field, options=None, label_opts=None, input_opts=None, form_group=None):
    """Creates a select field.

    ``options`` are Django choices: ``(value, label)`` pairs, optgroups or bare
    values used as both.  When omitted the field's own choices are rendered.
    """
    bound_field = _bound_field(form, field)
    choices = _select_choices(bound_field, options)
    return _draw_generic_input("select", form, bound_field, choices, label_opts, input_opts, form_group)


def multiple_select(form, field, options=None, label_opts=None, input_opts=None, form_group=None):
    """Creates a multiple-select field."""
    bound_field = _bound_field(form, field)
    choices = _select_choices(bound_field, options)
    return _draw_generic_input(
        "multiple_select", form, bound_field, choices, label_opts, input_opts, form_group
    )


def _special_select(kind, form, field, label_opts=None, input_opts=None, form_group=None):
    icon, picker_class = PICKERS[kind]
    bound_field = _bound_field(form, field)

    input_opts = dict(input_opts or {})
    help_text = input_opts.pop("help", None)
    append = input_opts.pop("append", None)
    # The icon addon takes the prepend slot.
    input_opts.pop("prepend", None)
    input_opts.pop("inline", None)

    attrs = merge_attrs(
        _input_attrs(form, bound_field, "form-control", {}),
        {"class": picker_class},
    )
    attrs = merge_attrs(attrs, input_opts)
    prepend = content_tag("i", "", class_=css_class("fas input-prefix", icon))
    input_html = _draw_input_group(_draw_input("text_input", bound_field, attrs), prepend, append)
    error = _draw_error_message(get_error(form, bound_field.name))
    control = content_tag(
        "div",
        [input_html, error, _draw_help(bound_field, help_text)],
        class_=conf.control_col_class(form),
    )
    return _draw_form_group(
        _draw_label(form, bound_field, label_opts), control, {"form_group": form_group}
    )


def time_select(form, field, label_opts=None, input_opts=None, form_group=None):
    """Creates a time-select field."""
    return _special_select("time_select", form, field, label_opts, input_opts, form_group)


def date_select(form, field, label_opts=None, input_opts=None, form_group=None):
    """Creates a date-select field."""
    return _special_select("date_select", form, field, label_opts, input_opts, form_group)


def datetime_select(form, field, label_opts=None, input_opts=None, form_group=None):
    """Creates a datetime-select field."""
    return _special_select("datetime_select", form, field, label_opts, input_opts, form_group)


def checkbox(form, field, label_opts=None, input_opts=None, form_group=None):
    """Creates a checkbox field.

    The label sits next to the box inside ``.form-check``; the label column of
    the row stays empty and the control column is pushed right with ``ml-auto``.
    """
    bound_field = _bound_field(form, field)
    label_opts = dict(label_opts or {})
    input_opts = dict(input_opts or {})
    help_text = input_opts.pop("help", None)
    inline = input_opts.pop("inline", False)
    input_opts.pop("prepend", None)
    input_opts.pop("append", None)

    if label_opts.get("show", True):
        label = label_opts.get("text")
        if label is None:
            label = bound_field.label
    else:
        label = ""

    attrs = _input_attrs(form, bound_field, "form-check-input", input_opts)
    input_html = bound_field.as_widget(widget=forms.CheckboxInput(), attrs=attrs)
    error = _draw_error_message(get_error(form, bound_field.name))

    content = content_tag(
        "div",
        [
            _draw_form_check(input_html, label, bound_field.id_for_label, error, inline),
            _draw_help(bound_field, help_text),
        ],
        class_=css_class(conf.control_col_class(form), "ml-auto"),
    )
    return _draw_form_group("", content, {"form_group": form_group})


def _value_id(bound_field, value):
    if not bound_field.auto_id:
        return None
    value_id = WHITESPACE.sub("", str(value))
    return f"{bound_field.auto_id}_{value_id}"


def _draw_choice_list(input_type, form, bound_field, values, checked, label_opts, input_opts, form_group):
    values = _labelled_values(values)
    input_opts = dict(input_opts or {})
    help_text = input_opts.pop("help", None)
    inline = input_opts.pop("inline", False)

    error = _draw_error_message(get_error(form, bound_field.name))
    input_class = css_class("form-check-input", is_valid_class(form, bound_field.name))

    items = []
    for index, (value, label) in enumerate(values):
        # Only the last item carries the error message.
        item_error = error if index == len(values) - 1 else ""
        input_id = _value_id(bound_field, value)
        input_html = tag(
            "input",
            type=input_type,
            name=bound_field.html_name,
            id=input_id,
            value=str(value),
            class_=input_class,
            checked=checked(value),
        )
        items.append(_draw_form_check(input_html, label, input_id, item_error, inline))

    content = content_tag(
        "div", [items, _draw_help(bound_field, help_text)], class_=conf.control_col_class(form)
    )
    return _draw_form_group(
        _draw_label(form, bound_field, label_opts, span=True), content, {"form_group": form_group}
    )


def _as_strings(values):
    if values is None:
        return set()
    if isinstance(values, (list, tuple, set)):
        return {str(value) for value in values}
    return {str(values)}


def checkboxes(form, field, values=None, selected=None, label_opts=None, input_opts=None, form_group=None):
    """Creates multiple checkbox fields.

    ``selected`` lists the checked values; when omitted the bound value of the
    field is used.
    """
    bound_field = _bound_field(form, field)
    if values is None:
        values = list(getattr(bound_field.field, "choices", []))
    chosen = _as_strings(bound_field.value() if selected is None else selected)
    return _draw_choice_list(
        "checkbox",
        form,
        bound_field,
        values,
        lambda value: str(value) in chosen,
        label_opts,
        input_opts,
        form_group,
    )


def radio_buttons(form, field, values=None, label_opts=None, input_opts=None, form_group=None):
    """Creates radio buttons, one per value."""
    bound_field = _bound_field(form, field)
    if values is None:
        values = list(getattr(bound_field.field, "choices", []))
    current = bound_field.value()
    current = None if current is None else str(current)
    return _draw_choice_list(
        "radio",
        form,
        bound_field,
        values,
        lambda value: str(value) == current,
        label_opts,
        input_opts,
        form_group,
    )


def submit(form, label=None, alternative="", form_group=None, **attrs):
    """Creates a submit button.

    ``alternative`` is rendered right after the button, typically a cancel
    link.  Remaining keyword arguments become button attributes.
    """
    attrs = merge_attrs({"class": "btn"}, attrs)
    attrs.setdefault("type", "submit")
    button = content_tag("button", label or gettext("Submit"), **attrs)
    content = content_tag(
        "div",
        [button, alternative],
        class_=css_class(conf.control_col_class(form), "ml-auto"),
    )
    return _draw_form_group("", content, {"form_group": form_group})


def static(form, label, content):
    """Creates a static form row that is not bound to any field."""
    label = content_tag(
        "label",
        label,
        class_=css_class(conf.label_col_class(form), conf.label_align_class(form)),
    )
    content = content_tag(
        "div",
        content,
        class_=css_class("form-control-plaintext", conf.control_col_class(form)),
    )
    return _draw_form_group(label, content)


def _draw_widget(form, field, label_opts=None, input_opts=None, form_group=None):
    return _draw_generic_input(None, form, field, None, label_opts, input_opts, form_group)


# Most specific widget classes first: several of them subclass each other.
WIDGET_RENDERERS = [
    (forms.HiddenInput, None),
    (forms.CheckboxSelectMultiple, checkboxes),
    (forms.RadioSelect, radio_buttons),
    (forms.SelectMultiple, multiple_select),
    (forms.Select, select),
    (forms.CheckboxInput, checkbox),
    (forms.DateTimeInput, datetime_select),
    (forms.DateInput, date_select),
    (forms.TimeInput, time_select),
    (forms.Textarea, textarea),
    (forms.FileInput, file_input),
    (forms.EmailInput, email_input),
    (forms.PasswordInput, password_input),
    (forms.NumberInput, number_input),
    (TelephoneInput, telephone_input),
    (forms.TextInput, text_input),
]


def renderer_for(widget):
    """Return the renderer matching ``widget`` or ``None`` for hidden inputs."""

    for widget_class, renderer in WIDGET_RENDERERS:
        if isinstance(widget, widget_class):
            return renderer
    return _draw_widget


def field(form, name, label_opts=None, input_opts=None, form_group=None):
    """Render ``name`` with the helper matching its widget."""

    bound_field = _bound_field(form, name)
    renderer = renderer_for(bound_field.field.widget)
    if renderer is None:
        return bound_field.as_widget()
    logger.debug("Rendering field %s with %s", bound_field.name, renderer.__name__)
    return renderer(
        form, bound_field, label_opts=label_opts, input_opts=input_opts, form_group=form_group
    )


def form_fields(form, form_group=None):
    """Render every field of ``form`` in declaration order."""

    return join([field(form, bound_field, form_group=form_group) for bound_field in form])
