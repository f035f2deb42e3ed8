from django import forms
from django.core.exceptions import ImproperlyConfigured
from django.template import Context, Template
from django.test import SimpleTestCase, override_settings
from django.utils.safestring import mark_safe

from . import conf, helpers
from .errors import default_translate_error, get_error, has_error, is_valid_class
from .forms import MDBootstrapFormMixin, TelephoneInput
from .html import content_tag, css_class, merge_attrs, tag
from .templatetags.mdbootstrap_form import split_options


def shout_error(message, params=None):
    return default_translate_error(message, params).upper()


class RecordForm(forms.Form):
    value = forms.CharField()
    notes = forms.CharField(required=False, help_text="Visible to staff only.")
    document = forms.FileField()
    email = forms.EmailField(required=False)
    phone = forms.CharField(required=False, widget=TelephoneInput)
    amount = forms.IntegerField(required=False)
    color = forms.CharField(required=False)
    size = forms.ChoiceField(choices=[("s", "Small"), ("l", "Large")], required=False)
    due = forms.DateField(required=False)
    agree = forms.BooleanField(required=False)
    token = forms.CharField(required=False, widget=forms.HiddenInput)


class GridForm(MDBootstrapFormMixin, forms.Form):
    label_col = "col-form-label col-sm-4"
    control_col = "col-sm-8"
    label_align = "text-sm-left"

    value = forms.CharField()


class HtmlPrimitiveTests(SimpleTestCase):
    def test_css_class_skips_empty_parts(self):
        self.assertEqual(css_class("form-control", "", None, " is-invalid "), "form-control is-invalid")

    def test_merge_attrs_appends_classes(self):
        merged = merge_attrs({"class": "a", "id": "x"}, {"class_": "b", "id": "y"})
        self.assertEqual(merged, {"class": "a b", "id": "y"})

    def test_content_tag_escapes_unsafe_content(self):
        self.assertHTMLEqual(
            content_tag("div", "<b>", class_="box"),
            '<div class="box">&lt;b&gt;</div>',
        )
        self.assertHTMLEqual(content_tag("div", mark_safe("<b>x</b>")), "<div><b>x</b></div>")

    def test_tag_renders_booleans(self):
        self.assertHTMLEqual(
            tag("input", type="checkbox", checked=True, disabled=False, id=None),
            '<input type="checkbox" checked>',
        )


class ConfTests(SimpleTestCase):
    def test_defaults(self):
        form = RecordForm()
        self.assertEqual(conf.label_col_class(form), "col-form-label col-sm-2")
        self.assertEqual(conf.control_col_class(form), "col-sm-10")
        self.assertEqual(conf.label_align_class(form), "text-sm-right")
        self.assertEqual(conf.form_group_class(), "form-group row")

    @override_settings(MDBOOTSTRAP_FORM={"CONTROL_COL_CLASS": "col-md-9"})
    def test_settings_override_defaults(self):
        self.assertEqual(conf.control_col_class(RecordForm()), "col-md-9")

    @override_settings(MDBOOTSTRAP_FORM={"CONTROL_COL_CLASS": "col-md-9"})
    def test_form_attribute_overrides_settings(self):
        self.assertEqual(conf.control_col_class(GridForm()), "col-sm-8")

    def test_per_call_form_group_wins(self):
        self.assertEqual(conf.form_group_class({"form_group": "form-group"}), "form-group")

    def test_unknown_setting(self):
        with self.assertRaises(ImproperlyConfigured):
            conf.get_setting("NOPE")

    @override_settings(MDBOOTSTRAP_FORM="col-sm-2")
    def test_setting_must_be_a_dict(self):
        with self.assertRaises(ImproperlyConfigured):
            conf.get_setting("LABEL_COL_CLASS")


class ErrorTests(SimpleTestCase):
    def test_unbound_form_has_no_errors(self):
        form = RecordForm()
        self.assertFalse(has_error(form, "value"))
        self.assertIsNone(get_error(form, "value"))
        self.assertEqual(is_valid_class(form, "value"), "")

    def test_first_error_is_returned(self):
        form = RecordForm(data={})
        form.add_error("color", "Pick another one.")
        form.add_error("color", "Second problem.")
        self.assertEqual(get_error(form, "color"), "Pick another one.")
        self.assertEqual(is_valid_class(form, "color"), "is-invalid")

    def test_default_translation_interpolates_params(self):
        self.assertEqual(default_translate_error("Must be %(n)s", {"n": 3}), "Must be 3")
        self.assertEqual(default_translate_error("100% sure"), "100% sure")

    @override_settings(MDBOOTSTRAP_FORM={"TRANSLATE_ERROR_FUNCTION": "mdbootstrap_form.tests.shout_error"})
    def test_custom_translation_function(self):
        self.assertEqual(get_error(RecordForm(data={}), "value"), "THIS FIELD IS REQUIRED.")

    @override_settings(MDBOOTSTRAP_FORM={"TRANSLATE_ERROR_FUNCTION": shout_error})
    def test_custom_translation_callable(self):
        self.assertEqual(get_error(RecordForm(data={}), "value"), "THIS FIELD IS REQUIRED.")

    @override_settings(MDBOOTSTRAP_FORM={"TRANSLATE_ERROR_FUNCTION": "mdbootstrap_form.tests.missing"})
    def test_bad_translation_path(self):
        with self.assertRaises(ImproperlyConfigured):
            get_error(RecordForm(data={}), "value")


class TextInputTests(SimpleTestCase):
    def test_layout(self):
        self.assertHTMLEqual(
            helpers.text_input(RecordForm(), "value"),
            """
            <div class="form-group row">
              <label class="col-form-label col-sm-2 text-sm-right" for="id_value">Value</label>
              <div class="col-sm-10">
                <input type="text" name="value" class="form-control" required id="id_value">
              </div>
            </div>
            """,
        )

    def test_accepts_bound_field(self):
        form = RecordForm()
        self.assertEqual(helpers.text_input(form, form["value"]), helpers.text_input(form, "value"))

    def test_custom_label_and_class(self):
        html = helpers.text_input(
            RecordForm(),
            "value",
            label_opts={"text": "Custom", "class": "extra"},
            input_opts={"class": "custom", "placeholder": "Type here"},
        )
        self.assertInHTML(
            '<label class="col-form-label col-sm-2 text-sm-right extra" for="id_value">Custom</label>',
            html,
        )
        self.assertIn('class="form-control custom"', html)
        self.assertIn('placeholder="Type here"', html)

    def test_hidden_label(self):
        html = helpers.text_input(RecordForm(), "value", label_opts={"show": False})
        self.assertNotIn("<label", html)
        self.assertIn("<span></span>", html)

    def test_help_text(self):
        html = helpers.text_input(RecordForm(), "value", input_opts={"help": "Help text"})
        self.assertInHTML(
            '<small class="form-text text-muted" id="id_value_helptext">Help text</small>', html
        )

    def test_field_help_text_is_used_by_default(self):
        html = helpers.text_input(RecordForm(), "notes")
        self.assertInHTML(
            '<small class="form-text text-muted" id="id_notes_helptext">Visible to staff only.</small>',
            html,
        )

    def test_no_help_no_error(self):
        html = helpers.text_input(RecordForm(), "value")
        self.assertNotIn("form-text", html)
        self.assertNotIn("invalid-feedback", html)
        self.assertNotIn("input-group", html)

    def test_prepend_and_append(self):
        html = helpers.text_input(RecordForm(), "value", input_opts={"prepend": "$", "append": ".00"})
        self.assertIn('<div class="input-group">', html)
        self.assertInHTML(
            '<div class="input-group-prepend"><span class="input-group-text">$</span></div>', html
        )
        self.assertInHTML(
            '<div class="input-group-append"><span class="input-group-text">.00</span></div>', html
        )
        self.assertLess(html.index("input-group-prepend"), html.index('name="value"'))
        self.assertLess(html.index('name="value"'), html.index("input-group-append"))

    def test_only_prepend(self):
        html = helpers.text_input(RecordForm(), "value", input_opts={"prepend": "@"})
        self.assertIn("input-group-prepend", html)
        self.assertNotIn("input-group-append", html)

    def test_error(self):
        html = helpers.text_input(RecordForm(data={}), "value", input_opts={"help": "Help text"})
        self.assertIn('class="form-control is-invalid"', html)
        self.assertInHTML('<div class="invalid-feedback">This field is required.</div>', html)
        self.assertLess(html.index("invalid-feedback"), html.index("form-text"))

    def test_form_grid_options(self):
        html = helpers.text_input(GridForm(), "value")
        self.assertIn('class="col-form-label col-sm-4 text-sm-left"', html)
        self.assertIn('<div class="col-sm-8">', html)

    @override_settings(MDBOOTSTRAP_FORM={"FORM_GROUP_CLASS": "form-group"})
    def test_form_group_setting(self):
        self.assertTrue(helpers.text_input(RecordForm(), "value").startswith('<div class="form-group">'))

    def test_form_group_per_call(self):
        html = helpers.text_input(RecordForm(), "value", form_group="md-form")
        self.assertTrue(html.startswith('<div class="md-form">'))

    def test_unknown_field(self):
        with self.assertRaises(KeyError):
            helpers.text_input(RecordForm(), "missing")


class OtherInputTests(SimpleTestCase):
    def test_input_types(self):
        form = RecordForm()
        self.assertIn('type="email"', helpers.email_input(form, "email"))
        self.assertIn('type="password"', helpers.password_input(form, "value"))
        self.assertIn('type="tel"', helpers.telephone_input(form, "phone"))
        self.assertIn('type="number"', helpers.number_input(form, "amount"))
        self.assertIn("<textarea", helpers.textarea(form, "notes"))

    def test_password_value_is_not_rendered(self):
        html = helpers.password_input(RecordForm(data={"value": "secret"}), "value")
        self.assertNotIn("secret", html)

    def test_file_input(self):
        html = helpers.file_input(RecordForm(), "document")
        self.assertIn('<div class="custom-file col-sm-10">', html)
        self.assertIn('class="custom-file-input"', html)
        self.assertIn('type="file"', html)
        self.assertInHTML('<label class="custom-file-label"></label>', html)

    def test_file_input_error(self):
        html = helpers.file_input(RecordForm(data={}), "document")
        self.assertIn('class="custom-file-input is-invalid"', html)
        self.assertInHTML('<div class="invalid-feedback">This field is required.</div>', html)


class SelectTests(SimpleTestCase):
    def test_select_with_options(self):
        html = helpers.select(RecordForm(data={"color": "green"}), "color", ["red", "green"])
        self.assertIn("<select", html)
        self.assertIn('class="form-control"', html)
        self.assertInHTML('<option value="red">red</option>', html)
        self.assertInHTML('<option value="green" selected>green</option>', html)

    def test_select_with_pairs(self):
        html = helpers.select(RecordForm(), "color", [("r", "Red"), ("g", "Green")])
        self.assertInHTML('<option value="g">Green</option>', html)

    def test_select_uses_field_choices(self):
        html = helpers.select(RecordForm(), "size")
        self.assertInHTML('<option value="l">Large</option>', html)

    def test_multiple_select(self):
        html = helpers.multiple_select(RecordForm(), "color", ["red", "green"])
        self.assertIn(" multiple", html)

    def test_select_error(self):
        form = RecordForm(data={})
        form.add_error("color", "Pick a color.")
        html = helpers.select(form, "color", ["red"])
        self.assertIn('class="form-control is-invalid"', html)
        self.assertInHTML('<div class="invalid-feedback">Pick a color.</div>', html)


class PickerTests(SimpleTestCase):
    def test_date_select(self):
        html = helpers.date_select(RecordForm(), "due")
        self.assertIn('class="form-control date-picker"', html)
        self.assertIn('type="text"', html)
        self.assertInHTML(
            '<div class="input-group-prepend"><span class="input-group-text">'
            '<i class="fas input-prefix fa-calendar"></i></span></div>',
            html,
        )

    def test_time_select(self):
        html = helpers.time_select(RecordForm(), "due")
        self.assertIn('class="form-control time-picker"', html)
        self.assertIn("fa-clock", html)

    def test_datetime_select(self):
        html = helpers.datetime_select(RecordForm(), "due", input_opts={"help": "When?"})
        self.assertIn('class="form-control date-time-picker"', html)
        self.assertInHTML('<small class="form-text text-muted" id="id_due_helptext">When?</small>', html)

    def test_picker_error(self):
        html = helpers.date_select(RecordForm(data={"due": "nope"}), "due")
        self.assertIn('class="form-control is-invalid date-picker"', html)
        self.assertIn("invalid-feedback", html)


class CheckboxTests(SimpleTestCase):
    def test_checkbox(self):
        self.assertHTMLEqual(
            helpers.checkbox(RecordForm(), "agree"),
            """
            <div class="form-group row">
              <div class="col-sm-10 ml-auto">
                <div class="form-check">
                  <input type="checkbox" name="agree" class="form-check-input" id="id_agree">
                  <label for="id_agree" class="form-check-label">Agree</label>
                </div>
              </div>
            </div>
            """,
        )

    def test_checkbox_label_options(self):
        html = helpers.checkbox(RecordForm(), "agree", label_opts={"text": "I agree"})
        self.assertInHTML('<label for="id_agree" class="form-check-label">I agree</label>', html)
        html = helpers.checkbox(RecordForm(), "agree", label_opts={"show": False})
        self.assertInHTML('<label for="id_agree" class="form-check-label"></label>', html)

    def test_checkbox_inline_help_and_error(self):
        form = RecordForm(data={})
        form.add_error("agree", "You must agree.")
        html = helpers.checkbox(form, "agree", input_opts={"inline": True, "help": "Read it first"})
        self.assertIn('class="form-check form-check-inline"', html)
        self.assertIn('class="form-check-input is-invalid"', html)
        self.assertInHTML('<div class="invalid-feedback">You must agree.</div>', html)
        self.assertIn("Read it first", html)

    def test_checkboxes(self):
        html = helpers.checkboxes(RecordForm(), "color", ["red", ("green", "Lime")], selected=["green"])
        self.assertInHTML('<span class="col-form-label col-sm-2 text-sm-right">Color</span>', html)
        self.assertInHTML(
            '<input type="checkbox" name="color" id="id_color_red" value="red" class="form-check-input">',
            html,
        )
        self.assertInHTML(
            '<input type="checkbox" name="color" id="id_color_green" value="green" '
            'class="form-check-input" checked>',
            html,
        )
        self.assertInHTML('<label for="id_color_green" class="form-check-label">Lime</label>', html)

    def test_checkboxes_use_bound_value(self):
        html = helpers.checkboxes(RecordForm(data={"color": "red"}), "color", ["red", "green"])
        self.assertInHTML(
            '<input type="checkbox" name="color" id="id_color_red" value="red" '
            'class="form-check-input" checked>',
            html,
        )

    def test_checkboxes_require_a_list(self):
        with self.assertRaises(TypeError):
            helpers.checkboxes(RecordForm(), "color", "red")


class RadioButtonTests(SimpleTestCase):
    def test_radio_buttons(self):
        html = helpers.radio_buttons(RecordForm(data={"color": "red"}), "color", ["red", "dark blue"])
        self.assertInHTML(
            '<div class="form-check">'
            '<input type="radio" name="color" id="id_color_red" value="red" class="form-check-input" checked>'
            '<label for="id_color_red" class="form-check-label">Red</label>'
            "</div>",
            html,
        )
        self.assertInHTML(
            '<input type="radio" name="color" id="id_color_darkblue" value="dark blue" class="form-check-input">',
            html,
        )
        self.assertInHTML('<label for="id_color_darkblue" class="form-check-label">Dark blue</label>', html)

    def test_error_only_on_last_item(self):
        form = RecordForm(data={})
        form.add_error("color", "Pick one.")
        html = helpers.radio_buttons(form, "color", ["red", "green", "blue"])
        self.assertEqual(html.count("invalid-feedback"), 1)
        self.assertGreater(html.index("invalid-feedback"), html.index('for="id_color_blue"'))
        self.assertEqual(html.count('class="form-check-input is-invalid"'), 3)

    def test_inline(self):
        html = helpers.radio_buttons(RecordForm(), "color", ["red", "green"], input_opts={"inline": True})
        self.assertEqual(html.count('class="form-check form-check-inline"'), 2)

    def test_field_choices(self):
        html = helpers.radio_buttons(RecordForm(), "size")
        self.assertInHTML('<label for="id_size_s" class="form-check-label">Small</label>', html)

    def test_values_must_be_a_list(self):
        with self.assertRaises(TypeError):
            helpers.radio_buttons(RecordForm(), "color", "red")


class SubmitAndStaticTests(SimpleTestCase):
    def test_submit(self):
        self.assertHTMLEqual(
            helpers.submit(RecordForm()),
            """
            <div class="form-group row">
              <div class="col-sm-10 ml-auto">
                <button class="btn" type="submit">Submit</button>
              </div>
            </div>
            """,
        )

    def test_submit_with_label_class_and_alternative(self):
        cancel = mark_safe('<a href="/" class="btn btn-link">Cancel</a>')
        html = helpers.submit(RecordForm(), "Smash", alternative=cancel, class_="btn-primary")
        self.assertInHTML('<button class="btn btn-primary" type="submit">Smash</button>', html)
        self.assertInHTML('<a href="/" class="btn btn-link">Cancel</a>', html)

    def test_static(self):
        self.assertHTMLEqual(
            helpers.static(RecordForm(), "Current Avatar", "<img>"),
            """
            <div class="form-group row">
              <label class="col-form-label col-sm-2 text-sm-right">Current Avatar</label>
              <div class="form-control-plaintext col-sm-10">&lt;img&gt;</div>
            </div>
            """,
        )


class FieldDispatchTests(SimpleTestCase):
    def test_renderer_lookup(self):
        self.assertIs(helpers.renderer_for(forms.Select()), helpers.select)
        self.assertIs(helpers.renderer_for(forms.SelectMultiple()), helpers.multiple_select)
        self.assertIs(helpers.renderer_for(forms.RadioSelect()), helpers.radio_buttons)
        self.assertIs(helpers.renderer_for(forms.CheckboxSelectMultiple()), helpers.checkboxes)
        self.assertIs(helpers.renderer_for(forms.CheckboxInput()), helpers.checkbox)
        self.assertIs(helpers.renderer_for(forms.DateInput()), helpers.date_select)
        self.assertIs(helpers.renderer_for(forms.DateTimeInput()), helpers.datetime_select)
        self.assertIs(helpers.renderer_for(forms.TimeInput()), helpers.time_select)
        self.assertIs(helpers.renderer_for(forms.ClearableFileInput()), helpers.file_input)
        self.assertIs(helpers.renderer_for(TelephoneInput()), helpers.telephone_input)
        self.assertIs(helpers.renderer_for(forms.TextInput()), helpers.text_input)
        self.assertIsNone(helpers.renderer_for(forms.HiddenInput()))

    def test_field_renders_hidden_input_bare(self):
        self.assertHTMLEqual(
            helpers.field(RecordForm(), "token"),
            '<input type="hidden" name="token" id="id_token">',
        )

    def test_field_dispatch(self):
        form = RecordForm()
        self.assertIn("<select", helpers.field(form, "size"))
        self.assertIn("form-check-input", helpers.field(form, "agree"))
        self.assertIn("date-picker", helpers.field(form, "due"))

    def test_unknown_widget_keeps_its_own_type(self):
        class UrlForm(forms.Form):
            site = forms.URLField()

        html = helpers.field(UrlForm(), "site")
        self.assertIn('type="url"', html)
        self.assertIn('class="form-control"', html)

    def test_form_fields(self):
        html = helpers.form_fields(RecordForm())
        self.assertLess(html.index('id="id_value"'), html.index('id="id_notes"'))
        self.assertIn('type="hidden"', html)
        self.assertEqual(html.count('<div class="form-group row">'), len(RecordForm.base_fields) - 1)


class TemplateTagTests(SimpleTestCase):
    def render(self, source, **context):
        return Template("{% load mdbootstrap_form %}" + source).render(Context(context))

    def test_split_options(self):
        self.assertEqual(
            split_options(
                {"label_text": "Name", "help": "Hi", "input_class": "x", "aria_label": "n", "form_group": "g"}
            ),
            {
                "label_opts": {"text": "Name"},
                "input_opts": {"help": "Hi", "class": "x", "aria-label": "n"},
                "form_group": "g",
            },
        )

    def test_text_input_tag(self):
        html = self.render(
            '{% mdb_text_input form "value" label_text="Custom" help="Help" prepend="$" %}',
            form=RecordForm(),
        )
        self.assertInHTML(
            '<label class="col-form-label col-sm-2 text-sm-right" for="id_value">Custom</label>', html
        )
        self.assertInHTML('<small class="form-text text-muted" id="id_value_helptext">Help</small>', html)
        self.assertIn("input-group-prepend", html)

    def test_radio_buttons_tag(self):
        html = self.render(
            '{% mdb_radio_buttons form "color" colors inline=True %}',
            form=RecordForm(),
            colors=["red", "green"],
        )
        self.assertEqual(html.count("form-check-inline"), 2)

    def test_submit_tag(self):
        html = self.render('{% mdb_submit form "Save" class="btn-primary" %}', form=RecordForm())
        self.assertInHTML('<button class="btn btn-primary" type="submit">Save</button>', html)

    def test_static_tag_escapes(self):
        html = self.render('{% mdb_static form "Avatar" content %}', form=RecordForm(), content="<img>")
        self.assertIn("&lt;img&gt;", html)

    def test_field_and_form_tags(self):
        form = RecordForm()
        self.assertIn("<select", self.render('{% mdb_field form "size" %}', form=form))
        self.assertIn('name="agree"', self.render("{% mdb_form form %}", form=form))


class ShortForm(forms.Form):
    code = forms.CharField(max_length=3)
    shade = forms.ChoiceField(
        choices=[("Warm", [("r", "Red"), ("o", "Orange")]), ("b", "Blue")],
        widget=forms.RadioSelect,
        required=False,
    )


class RegressionTests(SimpleTestCase):
    def test_tag_accepts_name_attribute(self):
        self.assertHTMLEqual(tag("input", type="text", name="q"), '<input type="text" name="q">')
        self.assertHTMLEqual(
            content_tag("button", "Go", name="action"), '<button name="action">Go</button>'
        )

    def test_plural_validator_message(self):
        form = ShortForm(data={"code": "toolong"})
        expected = "Ensure this value has at most 3 characters (it has 7)."
        self.assertEqual(get_error(form, "code"), expected)
        self.assertInHTML(
            f'<div class="invalid-feedback">{expected}</div>', helpers.text_input(form, "code")
        )

    def test_submit_name_attribute(self):
        html = helpers.submit(RecordForm(), "Save", name="action", value="save")
        self.assertInHTML(
            '<button class="btn" type="submit" name="action" value="save">Save</button>', html
        )

    def test_submit_type_override(self):
        html = helpers.submit(RecordForm(), "Clear", type="reset")
        self.assertInHTML('<button class="btn" type="reset">Clear</button>', html)
        self.assertEqual(html.count("type="), 1)

    def test_submit_tag_dashes_attributes(self):
        html = Template('{% load mdbootstrap_form %}{% mdb_submit form "Go" data_action="go" %}').render(
            Context({"form": RecordForm()})
        )
        self.assertInHTML('<button class="btn" type="submit" data-action="go">Go</button>', html)

    def test_radio_buttons_flatten_optgroups(self):
        html = helpers.radio_buttons(ShortForm(), "shade")
        self.assertInHTML('<label for="id_shade_r" class="form-check-label">Red</label>', html)
        self.assertInHTML('<label for="id_shade_b" class="form-check-label">Blue</label>', html)
        self.assertNotIn("Warm", html)
        self.assertEqual(html.count('type="radio"'), 3)

    def test_field_dispatches_radio_select(self):
        self.assertEqual(helpers.field(ShortForm(), "shade").count('type="radio"'), 3)

    def test_empty_label_text_is_kept(self):
        html = helpers.text_input(RecordForm(), "value", label_opts={"text": ""})
        self.assertInHTML(
            '<label class="col-form-label col-sm-2 text-sm-right" for="id_value"></label>', html
        )
        html = helpers.checkbox(RecordForm(), "agree", label_opts={"text": ""})
        self.assertInHTML('<label for="id_agree" class="form-check-label"></label>', html)
