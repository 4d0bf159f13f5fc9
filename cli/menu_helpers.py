# cli/menu_helpers.py

"""
Helper functions for CLI menus and user interaction in the Student Roster application.

This module provides utilities for:
- Displaying interactive menus and result lists
- Prompting for and validating user input
- Handling user selections and confirmation flows
- Displaying standard system messages and error feedback

These functions are shared across all menu modules to maintain consistent behavior and reduce duplication.
"""

import logging
from enum import Enum
from typing import Any, Callable, Iterable

import cli.model_formatters as model_formatters
import core.formatters as formatters
from core.records import FIELD_SELECTORS
from core.response import Response
from models.roster import Roster
from models.student import Student


class MenuSignal(Enum):
    CANCEL = "CANCEL"
    DEFAULT = "DEFAULT"
    EXIT = "EXIT"


# === display methods ===


def display_menu(
    title: str,
    options: list[tuple[str, Callable[..., Any]]],
    zero_option: str = "Return",
) -> MenuSignal | Callable[..., Any]:
    """
    Displays a numbered CLI menu and returns the selected action.

    Args:
        title (str): The heading displayed above the menu options.
        options (list[tuple[str, Callable[..., Any]]]): A list of (label, action) pairs to present.
        zero_option (str, optional): The label for the "cancel" or "exit" option. Defaults to "Return".

    Returns:
        MenuSignal.EXIT if the user selects the zero option.
        Callable[..., Any]: The function associated with the selected menu item.

    Notes:
        - Menu selection is repeated until a valid choice is made.
        - User input is matched by menu index, not by label.
    """
    while True:
        print(f"\n{title}")

        for i, (label, _) in enumerate(options, 1):
            print(f"{i}. {label}")

        print(f"0. {zero_option}")

        choice = prompt_user_input("\nSelect an option: ")

        if choice == "0":
            return MenuSignal.EXIT

        try:
            # casts choice to int and adjusts for zero-index, retrieves action from tuple
            return options[int(choice) - 1][1]

        except (ValueError, IndexError):
            print("Invalid selection. Please try again.")


def display_results(
    results: Iterable[Any],
    show_index: bool = False,
    formatter: Callable[[Any], str] = lambda x: str(x),
) -> None:
    """
    Prints a list of results to the console, optionally numbered and formatted.

    Args:
        results (Iterable[Any]): A sequence of results to display.
        show_index (bool, optional): If True, prepends a numbered index to each result. Defaults to False.
        formatter (Callable[[Any], str], optional): A function to convert each result to a display string. Defaults to str().
    """
    for i, result in enumerate(results, 1):
        prefix = f"{i:>2}. " if show_index else ""
        print(f"{prefix}{formatter(result)}")


# === prompt user input methods ===


# Blank input doubles as a control signal: CANCEL, DEFAULT, or None depending on the variant.
# Every prompt goes through `prompt_user_input()` so the UI format stays uniform.


def confirm_action(prompt: str) -> bool:
    while True:
        choice = prompt_user_input(f"{prompt} (y/n): ").lower()

        if choice == "y" or choice == "yes":
            return True

        elif choice == "n" or choice == "no":
            return False

        else:
            print("Invalid selection. Please try again.")


def confirm_make_change() -> bool:
    return confirm_action("Do you want to make this change?")


def prompt_user_input(prompt: str) -> str:
    return input(f"\n{prompt}\n  >> ").strip()


def prompt_user_input_or_cancel(prompt: str) -> str | MenuSignal:
    response = prompt_user_input(prompt)
    return MenuSignal.CANCEL if response == "" else response


def prompt_user_input_or_default(prompt: str) -> str | MenuSignal:
    response = prompt_user_input(prompt)
    return MenuSignal.DEFAULT if response == "" else response


def prompt_user_input_or_none(prompt: str) -> str | None:
    response = prompt_user_input(prompt)
    return None if response == "" else response


def prompt_choice(
    prompt: str, choices: Iterable[str], default: str
) -> str:
    """
    Prompts until the user enters one of `choices` (case-insensitive), returning `default` on blank input.
    """
    allowed = [choice.lower() for choice in choices]

    while True:
        response = prompt_user_input_or_default(
            f"{prompt} [{'/'.join(allowed)}] (leave blank for '{default}'):"
        )

        if response is MenuSignal.DEFAULT:
            return default

        if str(response).lower() in allowed:
            return str(response).lower()

        print("Invalid selection. Please try again.")


def prompt_field_selector(default: str = "nama") -> str:
    return prompt_choice("Which field?", FIELD_SELECTORS, default)


# === finder, search, and select methods ===


def prompt_selection_from_search(
    search_results: list[Student],
    formatter: Callable[[Student], str] = model_formatters.format_student_oneline,
) -> Student | None:
    """
    Prompts the user to select a student from a set of search results.

    Args:
        search_results (list[Student]): The matching students.
        formatter (Callable[[Student], str], optional): Function to convert each student to a display string.

    Returns:
        Student: The selected student, if chosen.
        None:
            - If the search returned no results.
            - If the user cancels with "0".

    Notes:
        - If a single result is found, it is returned automatically.
        - Otherwise, a numbered selection prompt is shown.
    """
    if not search_results:
        print("\nYour search returned no results.")
        return

    if len(search_results) == 1:
        return search_results[0]

    print(f"\nYour search returned {len(search_results)}:")

    while True:
        display_results(search_results, True, formatter)

        choice = prompt_user_input("Select an option (0 to cancel):")

        if choice == "0":
            return

        try:
            index = int(choice) - 1
            return search_results[index]

        except (ValueError, IndexError):
            print("\nInvalid selection. Please try again.")


def find_student_by_search(roster: Roster) -> Student | MenuSignal:
    """
    Prompts the user for a field and query, then to select one of the matching students.

    Returns:
        - The selected `Student` if search and selection succeed.
        - `MenuSignal.CANCEL` if no match is found or the user cancels.
    """
    field = prompt_field_selector()
    query = prompt_user_input(f"Search students by {field}:")

    matches = roster.search_students(query, field)

    student = prompt_selection_from_search(matches.results)

    return MenuSignal.CANCEL if student is None else student


# === often used messages ===


def returning_without_changes() -> None:
    print("\nReturning without changes.")


def returning_to(destination: str) -> None:
    print(f"\nReturning to {destination}.")


def caution_banner() -> None:
    caution_banner = formatters.format_banner_text("CAUTION!")
    print(f"\n{caution_banner}")


def display_response_failure(response: Response, debug: bool | None = None) -> None:
    """
    Displays a formatted error message based on a failed `Response`.

    Args:
        response (Response): The response object to inspect.
        debug (bool, optional): If True, prints the trace field when present. Defaults to whether
            DEBUG logging is enabled (`ROSTER_LOG_LEVEL=debug`).

    Notes:
        - Does nothing if the response was successful.
        - Enum error codes are printed by name; string errors are printed as-is.
    """
    if response.success:
        return

    error_label = (
        response.error.name if isinstance(response.error, Enum) else str(response.error)
    )

    print(f"\n[ERROR: {error_label}] {response.detail}")

    field_errors = response.data.get("errors")
    if field_errors:
        print(f"Fields to correct: {formatters.format_list_with_and(list(field_errors))}")

    if debug is None:
        debug = logging.getLogger().isEnabledFor(logging.DEBUG)

    if debug and response.trace:
        print(f"\nDebug Trace: {response.trace}")


def display_write_outcome(response: Response) -> None:
    """
    Prints the outcome of a roster write, including a warning if the follow-up save failed.
    """
    if not response.success:
        display_response_failure(response)
        return

    print(f"\n{response.detail}")

    if response.data.get("saved") is False:
        print(f"[WARNING] Changes are kept in memory but were not saved: {response.data.get('save_detail')}")
