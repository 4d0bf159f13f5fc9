# cli/menus/students_menu.py

"""
Manage Students menu for the Student Roster CLI.

Provides functions for adding, editing, removing, and viewing student records.
Every change is saved through the roster as soon as it is confirmed.
"""

from typing import Any, Callable, cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from core.validation import FIELD_VALIDATORS
from models.roster import Roster
from models.student import Student


def run(roster: Roster) -> None:
    """
    Top-level loop with dispatch for the Manage Students menu.

    Args:
        roster (Roster): The active `Roster`.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    title = formatters.format_banner_text("Manage Students")
    options = [
        ("Add Student", lambda: add_student(roster)),
        ("Edit Student", lambda: find_and_edit_student(roster)),
        ("Remove Student", lambda: find_and_remove_student(roster)),
        ("Remove Multiple Students", lambda: remove_multiple_students(roster)),
        ("View Students", lambda: view_students_menu(roster)),
    ]
    zero_option = "Return to Roster Manager menu"

    while True:
        menu_response = helpers.display_menu(title, options, zero_option)

        if menu_response is MenuSignal.EXIT:
            break

        elif callable(menu_response):
            menu_response()

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")

    helpers.returning_to("Roster Manager menu")


# === add student ===


def add_student(roster: Roster) -> None:
    """
    Loops a prompt to collect a new student's fields and add them to the roster.

    Notes:
        - Field errors are caught per prompt, so the roster's own validation is a second gate.
    """
    while True:
        data = prompt_new_student_data()

        if data is not None and preview_and_confirm_student(data):
            roster_response = roster.add_student(data)

            helpers.display_write_outcome(roster_response)

            if not roster_response.success:
                print(f"\n{data['nama']} was not added.")

        if not helpers.confirm_action(
            "Would you like to continue adding new students?"
        ):
            break

    helpers.returning_to("Manage Students menu")


def prompt_new_student_data() -> dict[str, Any] | None:
    """
    Prompts for every field of a new student.

    Returns:
        A dictionary of field values ready for `Roster.add_student()`, or None if the user cancels.
    """
    data: dict[str, Any] = {}

    for field, label in FIELD_LABELS.items():
        value = prompt_field_input_or_cancel(field, label)

        if value is MenuSignal.CANCEL:
            return None

        data[field] = value

    if helpers.confirm_action("Is this a graduate student?"):
        thesis = helpers.prompt_user_input_or_cancel(
            "Enter thesis title (leave blank to cancel):"
        )

        if thesis is MenuSignal.CANCEL:
            return None

        data["thesis"] = thesis

    return data


def preview_and_confirm_student(data: dict[str, Any]) -> bool:
    print("\nYou are about to create the following student:")

    for field, label in FIELD_LABELS.items():
        print(f"... {label}: {data[field]}")

    if "thesis" in data:
        print(f"... Thesis: {data['thesis']}")

    if helpers.confirm_action("Would you like to create this student?"):
        return True

    print(f"\nDiscarding student: {data['nama']}")
    return False


# === data input helpers ===


FIELD_LABELS = {
    "nim": "NIM",
    "nama": "Name",
    "email": "Email",
    "jurusan": "Department",
    "semester": "Semester",
    "ipk": "IPK",
}


def parse_field_input(field: str, raw: str) -> Any:
    """
    Converts raw text input to the type a field is stored as.

    Numeric fields that do not parse are returned as the original string, so that validation reports them.
    """
    try:
        if field == "semester":
            return int(raw)

        if field == "ipk":
            return float(raw)

    except ValueError:
        return raw

    return raw


def prompt_field_input_or_cancel(field: str, label: str) -> Any:
    """
    Solicits user input for a single field, validates it, and treats blank input as 'cancel'.

    Returns:
        The parsed and validated value, or `MenuSignal.CANCEL` if the user cancels input.
    """
    validator = FIELD_VALIDATORS[field]

    while True:
        raw = helpers.prompt_user_input_or_cancel(
            f"Enter {label} (leave blank to cancel):"
        )

        if raw is MenuSignal.CANCEL:
            return raw

        value = parse_field_input(field, cast(str, raw))
        result = validator(value)

        if result.is_valid:
            return value

        print(f"\n[ERROR] {result.message}")
        print("Please try again.")


# === edit student ===


def get_editable_fields() -> list[tuple[str, Callable[[Student, Roster], None]]]:
    """
    Helper method to organize the list of editable fields and their related functions.
    """
    fields: list[tuple[str, Callable[[Student, Roster], None]]] = [
        (label, make_field_editor(field, label)) for field, label in FIELD_LABELS.items()
    ]
    fields.append(("Thesis", edit_thesis_and_confirm))

    return fields


def find_and_edit_student(roster: Roster) -> None:
    student = helpers.find_student_by_search(roster)

    if student is MenuSignal.CANCEL:
        return
    student = cast(Student, student)

    edit_student(student, roster)


def edit_student(student: Student, roster: Roster) -> None:
    """
    Interface for editing fields of a `Student` record.

    Args:
        student (Student): The `Student` object being edited.
        roster (Roster): The active `Roster`.

    Raises:
        RuntimeError: If the menu response is unrecognized.

    Notes:
        - All edit operations are dispatched through `Roster.update_student()`, which validates and saves.
    """
    print("\nYou are editing the following student:")
    print(model_formatters.format_student_multiline(student))

    title = formatters.format_banner_text("Editable Fields")
    options = get_editable_fields()
    zero_option = "Finish editing and return"

    while True:
        menu_response = helpers.display_menu(title, options, zero_option)

        if menu_response is MenuSignal.EXIT:
            break
        elif callable(menu_response):
            menu_response(student, roster)
        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")

        if not helpers.confirm_action(
            "Would you like to continue editing this student?"
        ):
            break

    helpers.returning_to("Manage Students menu")


def make_field_editor(field: str, label: str) -> Callable[[Student, Roster], None]:
    """
    Builds an editor that prompts for one field and applies it via `Roster.update_student()`.
    """

    def edit_field_and_confirm(student: Student, roster: Roster) -> None:
        current_value = getattr(student, field)
        new_value = prompt_field_input_or_cancel(field, f"new {label}")

        if new_value is MenuSignal.CANCEL:
            helpers.returning_without_changes()
            return

        print(f"\nCurrent {label}: {current_value} -> New {label}: {new_value}")

        if not helpers.confirm_make_change():
            helpers.returning_without_changes()
            return

        helpers.display_write_outcome(roster.update_student(student.id, {field: new_value}))

    return edit_field_and_confirm


def edit_thesis_and_confirm(student: Student, roster: Roster) -> None:
    """
    Sets, changes, or clears the thesis title, which switches the student between standard and graduate.
    """
    current_thesis = student.thesis or "[NONE]"
    new_thesis = helpers.prompt_user_input_or_none(
        "Enter new thesis title (leave blank to clear it):"
    )

    print(f"\nCurrent thesis: {current_thesis} -> New thesis: {new_thesis or '[NONE]'}")

    if not helpers.confirm_make_change():
        helpers.returning_without_changes()
        return

    helpers.display_write_outcome(roster.update_student(student.id, {"thesis": new_thesis}))


# === remove student ===


def find_and_remove_student(roster: Roster) -> None:
    student = helpers.find_student_by_search(roster)

    if student is MenuSignal.CANCEL:
        return
    student = cast(Student, student)

    confirm_and_remove(student, roster)


def confirm_and_remove(student: Student, roster: Roster) -> None:
    """
    Warns the user and removes the student from the roster if confirmed.
    """
    helpers.caution_banner()
    print("You are about to permanently delete the following student:")
    print(model_formatters.format_student_multiline(student))

    if not helpers.confirm_action(
        "Are you sure you want to permanently remove this student? This action cannot be undone."
    ):
        helpers.returning_without_changes()
        return

    helpers.display_write_outcome(roster.delete_student(student.id))


def remove_multiple_students(roster: Roster) -> None:
    """
    Removes every student whose field matches a search, after a single confirmation.
    """
    field = helpers.prompt_field_selector()
    query = helpers.prompt_user_input_or_cancel(
        f"Remove students whose {field} contains (leave blank to cancel):"
    )

    if query is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return

    matches = roster.search_students(cast(str, query), field).results

    if not matches:
        print("\nYour search returned no results.")
        return

    helpers.caution_banner()
    print(f"You are about to permanently delete {len(matches)} students:")
    helpers.display_results(matches, True, model_formatters.format_student_oneline)

    if not helpers.confirm_action(
        "Are you sure you want to permanently remove these students? This action cannot be undone."
    ):
        helpers.returning_without_changes()
        return

    helpers.display_write_outcome(roster.delete_students(s.id for s in matches))


# === view student ===


def view_students_menu(roster: Roster) -> None:
    title = formatters.format_banner_text("View Students")
    options = [
        ("View Individual Student", lambda: view_individual_student(roster)),
        ("View All Students", lambda: view_all_students(roster)),
        ("View Graduate Students", lambda: view_graduate_students(roster)),
    ]
    zero_option = "Return to Manage Students menu"

    while True:
        menu_response = helpers.display_menu(title, options, zero_option)

        if menu_response is MenuSignal.EXIT:
            break

        elif callable(menu_response):
            menu_response()

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")

    helpers.returning_to("Manage Students menu")


def view_individual_student(roster: Roster) -> None:
    student = helpers.find_student_by_search(roster)

    if student is MenuSignal.CANCEL:
        return
    student = cast(Student, student)

    print(f"\n{model_formatters.format_student_multiline(student)}")


def view_all_students(roster: Roster) -> None:
    banner = formatters.format_banner_text("All Students")
    print(f"\n{banner}\n")

    students = roster.sort_students("nama").sorted_data

    if not students:
        print("There are no students on the roster.")
        return

    helpers.display_results(students, True, model_formatters.format_student_oneline)

    print(f"\nAverage IPK: {formatters.format_ipk(roster.average_ipk())}")


def view_graduate_students(roster: Roster) -> None:
    banner = formatters.format_banner_text("Graduate Students")
    print(f"\n{banner}\n")

    students_response = roster.get_records(lambda s: s.is_graduate)

    if not students_response.success:
        helpers.display_response_failure(students_response)
        return

    students = students_response.data["records"]

    if not students:
        print("There are no graduate students on the roster.")
        return

    helpers.display_results(students, True, Student.info)
