from django import forms


class MDBootstrapFormMixin:
    """Per-form grid overrides read by the rendering helpers.

    Leave an attribute as ``None`` to fall back to the ``MDBOOTSTRAP_FORM``
    setting and then to the built-in defaults.
    """

    label_col = None
    control_col = None
    label_align = None


class TelephoneInput(forms.TextInput):
    input_type = "tel"
