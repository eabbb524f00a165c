"""
Grouped AJAX form served to functional tests.

Every checkbox re-renders the ``checkbox-in-group-wrapper`` fieldset when it
changes. Checking the top-level checkbox reveals a nested group holding two
more AJAX checkboxes.
"""

from django import forms

GROUP_WRAPPER_ID = "checkbox-in-group-wrapper"


def ajax_checkbox(wrapper_id: str = GROUP_WRAPPER_ID) -> forms.CheckboxInput:
    return forms.CheckboxInput(attrs={"data-ajax-wrapper": wrapper_id})


class GroupedAjaxForm(forms.Form):
    """Checkboxes laid out in a fieldset with a nested fieldset inside it."""

    group_title = "Test group"
    nested_group_title = "Nested group"

    checkbox_in_group = forms.BooleanField(
        required=False,
        label="AJAX checkbox in a group",
        widget=ajax_checkbox(),
    )
    checkbox_in_nested = forms.BooleanField(
        required=False,
        label="AJAX checkbox in a nested group",
        widget=ajax_checkbox(),
    )
    another_checkbox_in_nested = forms.BooleanField(
        required=False,
        label="Another AJAX checkbox in a nested group",
        widget=ajax_checkbox(),
    )
    comment = forms.CharField(required=False, max_length=200, label="Comment")

    group_fields = ["checkbox_in_group"]
    nested_group_fields = ["checkbox_in_nested", "another_checkbox_in_nested"]

    @property
    def ajax_fields(self):
        return self.group_fields + self.nested_group_fields

    def show_nested_group(self) -> bool:
        """The nested group appears once the top-level checkbox is checked."""
        if not self.is_bound:
            return bool(self.initial.get("checkbox_in_group"))
        return bool(self.is_valid() and self.cleaned_data.get("checkbox_in_group"))

    def group(self):
        return [self[name] for name in self.group_fields]

    def nested_group(self):
        return [self[name] for name in self.nested_group_fields]
