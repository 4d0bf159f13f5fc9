# cli/menus/roster_menu.py

"""
Roster Manager menu for the Student Roster CLI.

Provides calls to the menus for managing students, running search and sort algorithms, and managing data,
as well as a summary of the roster.
"""

import cli.menu_helpers as helpers
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.menus import algorithms_menu, data_menu, students_menu
from models.roster import Roster


def run(roster: Roster) -> None:
    """
    Top-level loop with dispatch for the Roster Manager menu.

    Args:
        roster (Roster): The active `Roster`.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    title = formatters.format_banner_text("ROSTER MANAGER")
    options = [
        ("Manage Students", lambda: students_menu.run(roster)),
        ("Search & Sort", lambda: algorithms_menu.run(roster)),
        ("Manage Data", lambda: data_menu.run(roster)),
        ("Roster Summary", lambda: display_summary(roster)),
    ]
    zero_option = "Exit Program"

    while True:
        menu_response = helpers.display_menu(title, options, zero_option)

        if menu_response is MenuSignal.EXIT:
            break

        elif callable(menu_response):
            menu_response()

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")


def display_summary(roster: Roster) -> None:
    graduates = roster.get_records(lambda s: s.is_graduate).data.get("records", [])

    print(f"\nStudents: {len(roster)}")
    print(f"Graduate students: {len(graduates)}")
    print(f"Average IPK: {formatters.format_ipk(roster.average_ipk())}")
    print(f"Last saved: {formatters.format_timestamp_short(roster.last_saved)}")
    print(f"Backup available: {'yes' if roster.storage.has_backup() else 'no'}")
