"""Small tag-building primitives on top of ``django.utils.html``.

Every helper in :mod:`mdbootstrap_form.helpers` is assembled from these few
functions so the escaping rules live in a single place: content is escaped
unless it is already marked safe, and lists of fragments are concatenated in
order.
"""

from __future__ import annotations

from django.forms.utils import flatatt
from django.utils.html import conditional_escape, format_html
from django.utils.safestring import mark_safe

VOID_ELEMENTS = {"input", "br", "hr", "img"}


def css_class(*parts) -> str:
    """Join the non-empty class fragments of ``parts`` with single spaces."""

    return " ".join(part.strip() for part in parts if part and part.strip())


def merge_attrs(original: dict, updates: dict) -> dict:
    """Return a new attribute dictionary combining ``original`` and ``updates``.

    When both dictionaries contain a ``class`` entry we append the new value so
    existing CSS hooks are not lost.  All other attributes are overwritten by
    the explicit value supplied by the caller.
    """

    merged = {attr.rstrip("_"): value for attr, value in original.items()}
    for attr, value in updates.items():
        attr = attr.rstrip("_")
        if attr == "class" and merged.get(attr):
            merged[attr] = css_class(merged[attr], value)
        else:
            merged[attr] = value
    return merged


def _clean_attrs(attrs: dict) -> dict:
    # flatatt skips False but would render None as "None".
    cleaned = {}
    for key, value in attrs.items():
        key = key.rstrip("_")
        if value is None or value is False:
            continue
        if key == "class" and not value:
            continue
        cleaned[key] = value
    return cleaned


def join(content) -> str:
    """Concatenate ``content`` into one safe string, escaping unsafe pieces."""

    if content is None:
        return mark_safe("")
    if isinstance(content, (list, tuple)):
        return mark_safe("".join(str(join(piece)) for piece in content))
    return conditional_escape(content)


def tag(tag_name: str, /, **attrs) -> str:
    """Render a void element such as ``<input>``."""

    return format_html("<{}{}>", tag_name, flatatt(_clean_attrs(attrs)))


def content_tag(tag_name: str, content="", /, **attrs) -> str:
    """Render ``<name attrs>content</name>``.

    Reserved words are passed with a trailing underscore, e.g. ``class_`` or
    ``for_``.
    """

    if tag_name in VOID_ELEMENTS:
        raise ValueError(f"<{tag_name}> is a void element, use tag() instead")
    return format_html("<{0}{1}>{2}</{0}>", tag_name, flatatt(_clean_attrs(attrs)), join(content))
