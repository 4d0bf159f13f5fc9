# cli/menus/algorithms_menu.py

"""
Search & Sort menu for the Student Roster CLI.

Runs the searching and sorting algorithms over the current roster and reports their results
alongside comparison counts and complexity figures. Nothing here mutates the roster.
"""

from typing import cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
import core.search as search
import core.sort as sort
from cli.menu_helpers import MenuSignal
from core.records import SORT_ORDERS
from models.roster import Roster


def run(roster: Roster) -> None:
    """
    Top-level loop with dispatch for the Search & Sort menu.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    title = formatters.format_banner_text("Search & Sort")
    options = [
        ("Linear Search (contains)", lambda: run_linear_search(roster)),
        ("Binary Search (exact match)", lambda: run_binary_search(roster)),
        ("Pattern Search", lambda: run_pattern_search(roster)),
        ("Compare Search Algorithms", lambda: run_search_comparison(roster)),
        ("Sort Students", lambda: run_sort(roster)),
        ("Compare Sorting Algorithms", lambda: run_sort_comparison(roster)),
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


# === search ===


def prompt_query_or_cancel(field: str) -> str | MenuSignal:
    return helpers.prompt_user_input_or_cancel(
        f"Enter the {field} to search for (leave blank to cancel):"
    )


def run_linear_search(roster: Roster) -> None:
    field = helpers.prompt_field_selector()
    query = prompt_query_or_cancel(field)

    if query is MenuSignal.CANCEL:
        return

    result = roster.search_students(cast(str, query), field)

    print(f"\n{model_formatters.format_multi_search_result(result)}")
    helpers.display_results(result.results, True, model_formatters.format_student_oneline)


def run_binary_search(roster: Roster) -> None:
    field = helpers.prompt_field_selector(default="nim")
    query = prompt_query_or_cancel(field)

    if query is MenuSignal.CANCEL:
        return

    result = roster.find_exact(cast(str, query), field)

    print(f"\n{model_formatters.format_search_result(result)}")


def run_pattern_search(roster: Roster) -> None:
    field = helpers.prompt_field_selector()
    pattern = prompt_query_or_cancel(field)

    if pattern is MenuSignal.CANCEL:
        return

    result = search.sequential_search_with_pattern(
        roster.students, cast(str, pattern), field
    )

    print(f"\n{model_formatters.format_multi_search_result(result)}")
    helpers.display_results(result.results, True, model_formatters.format_student_oneline)


def run_search_comparison(roster: Roster) -> None:
    field = helpers.prompt_field_selector(default="nim")
    query = prompt_query_or_cancel(field)

    if query is MenuSignal.CANCEL:
        return

    comparison = search.compare_search_algorithms(roster.students, cast(str, query), field)

    print(f"\n{model_formatters.format_search_comparison(comparison)}")


# === sort ===


def prompt_sort_options() -> tuple[str, str]:
    field = helpers.prompt_field_selector()
    order = helpers.prompt_choice("Which order?", SORT_ORDERS, "asc")

    return field, order


def run_sort(roster: Roster) -> None:
    """
    Sorts a copy of the roster with a chosen algorithm and displays the ordering and its statistics.
    """
    algorithm = helpers.prompt_choice("Which algorithm?", sort.SORT_ALGORITHMS, "merge")
    field, order = prompt_sort_options()

    result = roster.sort_students(field, order, algorithm)

    print(f"\n{model_formatters.format_sort_result(result)}\n")
    helpers.display_results(
        result.sorted_data, True, model_formatters.format_student_oneline
    )


def run_sort_comparison(roster: Roster) -> None:
    field, order = prompt_sort_options()

    results = sort.compare_sort_algorithms(roster.students, field, order)

    banner = formatters.format_banner_text(f"Sorting {len(roster)} students by {field}")
    print(f"\n{banner}\n")

    helpers.display_results(results.values(), formatter=model_formatters.format_sort_result)
