"""
HTML form and DOM helpers for the interaction harness.

These functions do what a browser does around an AJAX form submission:
find the control that triggers the update, collect the current values of the
form that owns it, apply the caller's edits, and finally splice the insert
commands returned by the server into the current page.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from .exceptions import PartialUpdateError
from .responses import FieldValue

logger = logging.getLogger(__name__)

AJAX_WRAPPER_ATTR = "data-ajax-wrapper"
FIELD_TAGS = ["input", "select", "textarea"]
# Input types that never contribute a value to a submission
SKIPPED_INPUT_TYPES = ("submit", "button", "image", "reset", "file")
INSERT_METHODS = ("replaceWith", "html", "append", "prepend", "before", "after")

FormValues = Dict[str, List[str]]


def parse_html(body: str) -> BeautifulSoup:
    return BeautifulSoup(body, "html.parser")


def _input_type(control: Tag) -> str:
    if control.name != "input":
        return control.name
    return (control.get("type") or "text").lower()


def find_ajax_trigger(soup: BeautifulSoup, trigger_id: str) -> Tag:
    """
    Locate the interactive control identified by ``trigger_id``.

    The control is matched by its ``name`` first and its ``id`` second, and
    must declare the wrapper it re-renders through ``data-ajax-wrapper``.
    """

    def is_trigger(tag: Tag) -> bool:
        return tag.name in FIELD_TAGS + ["button"] and (
            tag.get("name") == trigger_id or tag.get("id") == trigger_id
        )

    candidates = soup.find_all(is_trigger)
    if not candidates:
        raise PartialUpdateError(f"No control named '{trigger_id}' on the page")

    for control in candidates:
        if control.has_attr(AJAX_WRAPPER_ATTR):
            return control

    raise PartialUpdateError(
        f"Control '{trigger_id}' does not trigger partial updates "
        f"(missing {AJAX_WRAPPER_ATTR})"
    )


def owning_form(control: Tag) -> Tag:
    form = control.find_parent("form")
    if form is None:
        raise PartialUpdateError(
            f"Control '{control.get('name') or control.get('id')}' is not inside a form"
        )
    return form


def collect_form_values(form: Tag) -> FormValues:
    """
    Collect the values a browser would submit for ``form``.

    Unchecked checkboxes and radios, disabled controls and buttons are left
    out. Selects submit their selected options, or the first option when none
    is marked.
    """
    values: FormValues = {}

    for control in form.find_all(FIELD_TAGS):
        name = control.get("name")
        if not name or control.has_attr("disabled"):
            continue

        kind = _input_type(control)
        if kind in SKIPPED_INPUT_TYPES:
            continue

        if kind in ("checkbox", "radio"):
            if control.has_attr("checked"):
                values.setdefault(name, []).append(control.get("value", "on"))
        elif kind == "select":
            options = control.find_all("option")
            selected = [opt for opt in options if opt.has_attr("selected")]
            if not selected and options and not control.has_attr("multiple"):
                selected = options[:1]
            for option in selected:
                values.setdefault(name, []).append(
                    option.get("value", option.get_text(strip=True))
                )
        elif kind == "textarea":
            values.setdefault(name, []).append(control.get_text())
        else:
            values.setdefault(name, []).append(control.get("value", ""))

    return values


def apply_edits(
    form: Tag, values: FormValues, edits: Mapping[str, FieldValue]
) -> FormValues:
    """
    Return a copy of ``values`` with ``edits`` applied to the form's fields.

    For checkboxes, ``True`` or ``False`` checks or unchecks every box sharing
    the name, while a string checks the one box whose value attribute matches
    and leaves the rest of the group as it is.
    """
    updated = {name: list(items) for name, items in values.items()}

    for name, value in edits.items():
        controls = [c for c in form.find_all(FIELD_TAGS) if c.get("name") == name]
        if not controls:
            raise PartialUpdateError(f"Field '{name}' not found in the form")

        if _input_type(controls[0]) == "checkbox":
            _edit_checkboxes(updated, name, controls, value)
        elif isinstance(value, bool):
            if value:
                updated[name] = ["1"]
            else:
                updated.pop(name, None)
        else:
            updated[name] = [value]

    return updated


def _edit_checkboxes(
    values: FormValues, name: str, controls: List[Tag], value: FieldValue
) -> None:
    box_values = [control.get("value", "on") for control in controls]

    if isinstance(value, bool):
        if value:
            values[name] = box_values
        else:
            values.pop(name, None)
        return

    if value not in box_values:
        raise PartialUpdateError(f"No '{name}' checkbox with value '{value}'")
    checked = values.setdefault(name, [])
    if value not in checked:
        checked.append(value)


def apply_insert_commands(soup: BeautifulSoup, commands: Iterable[Mapping]) -> int:
    """
    Apply ``insert`` commands to ``soup`` in place.

    Returns the number of commands applied. Commands other than ``insert``
    (settings, data) carry no markup and are skipped.
    """
    applied = 0

    for command in commands:
        if not isinstance(command, Mapping):
            raise PartialUpdateError(f"Malformed AJAX command: {command!r}")

        name = command.get("command")
        if name != "insert":
            logger.debug(f"Skipping AJAX command '{name}'")
            continue

        method = command.get("method", "replaceWith")
        selector = command.get("selector")
        if method not in INSERT_METHODS:
            raise PartialUpdateError(f"Unsupported insert method '{method}'")
        if not selector:
            raise PartialUpdateError("Insert command without a selector")

        target = soup.select_one(selector)
        if target is None:
            raise PartialUpdateError(f"Insert selector '{selector}' matched nothing")

        _insert(target, method, command.get("data") or "")
        applied += 1

    return applied


def _insert(target: Tag, method: str, markup: str) -> None:
    nodes = list(BeautifulSoup(markup, "html.parser").contents)

    if method == "replaceWith":
        for node in nodes:
            target.insert_before(node)
        target.decompose()
    elif method == "html":
        target.clear()
        for node in nodes:
            target.append(node)
    elif method == "append":
        for node in nodes:
            target.append(node)
    elif method == "prepend":
        for position, node in enumerate(nodes):
            target.insert(position, node)
    elif method == "before":
        for node in nodes:
            target.insert_before(node)
    elif method == "after":
        anchor: Optional[Tag] = target
        for node in nodes:
            anchor.insert_after(node)
            anchor = node
