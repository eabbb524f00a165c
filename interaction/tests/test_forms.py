"""
Tests for the HTML form and DOM helpers behind partial updates.

Tests cover:
- Locating AJAX trigger controls by name and id
- Collecting form values the way a browser submits them
- Applying payload edits to collected values
- Splicing insert commands into the current page
"""

from django.test import SimpleTestCase

from interaction.exceptions import PartialUpdateError
from interaction.forms import (
    apply_edits,
    apply_insert_commands,
    collect_form_values,
    find_ajax_trigger,
    owning_form,
    parse_html,
)

FORM_HTML = """
<form action="/submit" id="f">
  <input type="hidden" name="token" value="abc">
  <input type="text" name="title" value="Hello">
  <input type="text" name="untyped">
  <input type="checkbox" name="unchecked" data-ajax-wrapper="w">
  <input type="checkbox" name="checked" checked>
  <input type="checkbox" name="valued" value="yes" checked>
  <input type="radio" name="color" value="red">
  <input type="radio" name="color" value="blue" checked>
  <select name="size"><option value="s">S</option><option value="m" selected>M</option></select>
  <select name="first"><option value="a">A</option><option value="b">B</option></select>
  <textarea name="body">Some text</textarea>
  <input type="text" name="disabled" value="x" disabled>
  <input type="submit" name="op" value="Save">
  <button type="button" name="refresh" id="refresh-button" data-ajax-wrapper="w">Refresh</button>
</form>
<input type="checkbox" name="orphan" data-ajax-wrapper="w">
"""


class FindAjaxTriggerTest(SimpleTestCase):
    """Test locating the control that triggers a partial update."""

    def setUp(self):
        self.soup = parse_html(FORM_HTML)

    def test_finds_control_by_name(self):
        """Test that a control is matched on its name attribute."""
        control = find_ajax_trigger(self.soup, "unchecked")
        self.assertEqual(control["type"], "checkbox")

    def test_finds_control_by_id(self):
        """Test that a control is matched on its id when no name matches."""
        control = find_ajax_trigger(self.soup, "refresh-button")
        self.assertEqual(control.name, "button")

    def test_missing_control_raises(self):
        """Test that an unknown identifier raises PartialUpdateError."""
        with self.assertRaises(PartialUpdateError) as ctx:
            find_ajax_trigger(self.soup, "nope")
        self.assertIn("nope", str(ctx.exception))

    def test_control_without_wrapper_raises(self):
        """Test that a control without data-ajax-wrapper is not a trigger."""
        with self.assertRaises(PartialUpdateError) as ctx:
            find_ajax_trigger(self.soup, "title")
        self.assertIn("data-ajax-wrapper", str(ctx.exception))

    def test_control_outside_form_has_no_owning_form(self):
        """Test that a trigger outside any form is rejected."""
        control = find_ajax_trigger(self.soup, "orphan")
        with self.assertRaises(PartialUpdateError):
            owning_form(control)


class CollectFormValuesTest(SimpleTestCase):
    """Test serializing a form's current state."""

    def setUp(self):
        soup = parse_html(FORM_HTML)
        self.form = soup.find("form")
        self.values = collect_form_values(self.form)

    def test_text_and_hidden_inputs(self):
        """Test that text-like inputs submit their value attribute."""
        self.assertEqual(self.values["token"], ["abc"])
        self.assertEqual(self.values["title"], ["Hello"])
        self.assertEqual(self.values["untyped"], [""])

    def test_checkboxes(self):
        """Test that only checked checkboxes are submitted."""
        self.assertNotIn("unchecked", self.values)
        self.assertEqual(self.values["checked"], ["on"])
        self.assertEqual(self.values["valued"], ["yes"])

    def test_radios(self):
        """Test that the checked radio supplies the group's value."""
        self.assertEqual(self.values["color"], ["blue"])

    def test_selects(self):
        """Test selected options, falling back to the first option."""
        self.assertEqual(self.values["size"], ["m"])
        self.assertEqual(self.values["first"], ["a"])

    def test_textarea(self):
        """Test that textareas submit their text content."""
        self.assertEqual(self.values["body"], ["Some text"])

    def test_disabled_and_buttons_skipped(self):
        """Test that disabled controls and submit buttons are left out."""
        self.assertNotIn("disabled", self.values)
        self.assertNotIn("op", self.values)
        self.assertNotIn("refresh", self.values)


class ApplyEditsTest(SimpleTestCase):
    """Test applying a partial update payload to collected values."""

    def setUp(self):
        self.form = parse_html(FORM_HTML).find("form")
        self.values = collect_form_values(self.form)

    def test_checking_a_checkbox(self):
        """Test that True checks a checkbox with its default value."""
        updated = apply_edits(self.form, self.values, {"unchecked": True})
        self.assertEqual(updated["unchecked"], ["on"])

    def test_unchecking_a_checkbox(self):
        """Test that False removes a checkbox from the submission."""
        updated = apply_edits(self.form, self.values, {"valued": False})
        self.assertNotIn("valued", updated)

    def test_checkbox_uses_its_value_attribute(self):
        """Test that a checked checkbox submits its own value attribute."""
        values = apply_edits(self.form, self.values, {"valued": False})
        updated = apply_edits(self.form, values, {"valued": True})
        self.assertEqual(updated["valued"], ["yes"])

    def test_string_value_replaces_field(self):
        """Test that string edits replace the collected value."""
        updated = apply_edits(self.form, self.values, {"title": "Changed"})
        self.assertEqual(updated["title"], ["Changed"])

    def test_original_values_untouched(self):
        """Test that the collected values are not modified in place."""
        apply_edits(self.form, self.values, {"title": "Changed", "unchecked": True})
        self.assertEqual(self.values["title"], ["Hello"])
        self.assertNotIn("unchecked", self.values)

    def test_unknown_field_raises(self):
        """Test that editing a field the form lacks raises PartialUpdateError."""
        with self.assertRaises(PartialUpdateError) as ctx:
            apply_edits(self.form, self.values, {"missing": "x"})
        self.assertIn("missing", str(ctx.exception))


class CheckboxGroupEditsTest(SimpleTestCase):
    """Test edits on several checkboxes that share one name."""

    HTML = """
    <form>
      <input type="checkbox" name="tags" value="red" checked>
      <input type="checkbox" name="tags" value="green">
      <input type="checkbox" name="tags" value="blue">
    </form>
    """

    def setUp(self):
        self.form = parse_html(self.HTML).find("form")
        self.values = collect_form_values(self.form)

    def test_string_checks_matching_box_only(self):
        """Test that a string checks the box with that value and keeps the others."""
        updated = apply_edits(self.form, self.values, {"tags": "blue"})
        self.assertEqual(updated["tags"], ["red", "blue"])

    def test_checking_already_checked_box_is_not_duplicated(self):
        updated = apply_edits(self.form, self.values, {"tags": "red"})
        self.assertEqual(updated["tags"], ["red"])

    def test_true_checks_every_box(self):
        updated = apply_edits(self.form, self.values, {"tags": True})
        self.assertEqual(updated["tags"], ["red", "green", "blue"])

    def test_false_unchecks_every_box(self):
        updated = apply_edits(self.form, self.values, {"tags": False})
        self.assertNotIn("tags", updated)

    def test_unknown_box_value_raises(self):
        with self.assertRaises(PartialUpdateError):
            apply_edits(self.form, self.values, {"tags": "purple"})


class ApplyInsertCommandsTest(SimpleTestCase):
    """Test merging insert commands into the current page."""

    PAGE = '<div id="a"><p>old</p></div><span id="b">x</span>'

    def apply(self, method, selector, data):
        soup = parse_html(self.PAGE)
        applied = apply_insert_commands(
            soup,
            [
                {
                    "command": "insert",
                    "method": method,
                    "selector": selector,
                    "data": data,
                }
            ],
        )
        self.assertEqual(applied, 1)
        return str(soup)

    def test_replace_with(self):
        result = self.apply("replaceWith", "#a", '<div id="a"><p>new</p></div>')
        self.assertEqual(result, '<div id="a"><p>new</p></div><span id="b">x</span>')

    def test_html(self):
        result = self.apply("html", "#a", "<em>e</em>")
        self.assertEqual(result, '<div id="a"><em>e</em></div><span id="b">x</span>')

    def test_append(self):
        result = self.apply("append", "#a", "<i>1</i>")
        self.assertEqual(
            result, '<div id="a"><p>old</p><i>1</i></div><span id="b">x</span>'
        )

    def test_prepend(self):
        result = self.apply("prepend", "#a", "<i>1</i><i>2</i>")
        self.assertEqual(
            result, '<div id="a"><i>1</i><i>2</i><p>old</p></div><span id="b">x</span>'
        )

    def test_before(self):
        result = self.apply("before", "#b", "<b>1</b><b>2</b>")
        self.assertEqual(
            result, '<div id="a"><p>old</p></div><b>1</b><b>2</b><span id="b">x</span>'
        )

    def test_after(self):
        result = self.apply("after", "#a", "<b>1</b><b>2</b>")
        self.assertEqual(
            result, '<div id="a"><p>old</p></div><b>1</b><b>2</b><span id="b">x</span>'
        )

    def test_non_insert_commands_skipped(self):
        """Test that settings and data commands leave the page alone."""
        soup = parse_html(self.PAGE)
        applied = apply_insert_commands(
            soup,
            [
                {"command": "settings", "settings": {"x": 1}, "merge": True},
                {"command": "data", "selector": "#a", "name": "k", "value": "v"},
            ],
        )
        self.assertEqual(applied, 0)
        self.assertEqual(str(soup), self.PAGE)

    def test_unmatched_selector_raises(self):
        soup = parse_html(self.PAGE)
        with self.assertRaises(PartialUpdateError):
            apply_insert_commands(
                soup, [{"command": "insert", "selector": "#zzz", "data": "<p></p>"}]
            )

    def test_unsupported_method_raises(self):
        soup = parse_html(self.PAGE)
        with self.assertRaises(PartialUpdateError):
            apply_insert_commands(
                soup,
                [{"command": "insert", "method": "remove", "selector": "#a"}],
            )

    def test_malformed_command_raises(self):
        soup = parse_html(self.PAGE)
        with self.assertRaises(PartialUpdateError):
            apply_insert_commands(soup, ["insert"])
