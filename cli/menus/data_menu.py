# cli/menus/data_menu.py

"""
Manage Data menu for the Student Roster CLI.

Provides export to JSON or CSV files, import from a JSON file, backup restore, clearing all data,
and a manual save.
"""

import asyncio
import os
from typing import Callable, Iterable, cast

import cli.menu_helpers as helpers
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.path_utils import resolve_export_dir
from core.file_io import ExportFile, export_csv, export_json
from models.roster import Roster
from models.student import Student


def run(roster: Roster) -> None:
    """
    Top-level loop with dispatch for the Manage Data menu.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    title = formatters.format_banner_text("Manage Data")
    options = [
        ("Export to JSON", lambda: export_roster(roster, export_json)),
        ("Export to CSV", lambda: export_roster(roster, export_csv)),
        ("Import from JSON", lambda: import_roster(roster)),
        ("Restore from Backup", lambda: restore_backup(roster)),
        ("Clear All Data", lambda: clear_all_data(roster)),
        ("Save Now", lambda: save_roster(roster)),
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


# === export ===


def export_roster(
    roster: Roster, exporter: Callable[[Iterable[Student]], ExportFile]
) -> None:
    """
    Exports the roster with the given exporter and writes the file to a chosen directory.

    Notes:
        - A blank directory input uses the roster's data directory.
    """
    export_file = exporter(roster.students)

    dir_input = helpers.prompt_user_input_or_none(
        "Enter directory to save the export (leave blank to use the data directory):"
    )
    dir_path = resolve_export_dir(roster, dir_input)

    try:
        path = export_file.write_to(dir_path)

    except OSError as e:
        print(f"\n[ERROR] Could not write export file: {e}")
        return

    print(f"\n{len(roster)} students exported to {path}")


# === import ===


def import_roster(roster: Roster) -> None:
    """
    Prompts for a JSON file and replaces the whole roster with its records.

    Notes:
        - The file is read without blocking, and the roster is only replaced once the read has completed.
    """
    path = helpers.prompt_user_input_or_cancel(
        "Enter path to the JSON file to import (leave blank to cancel):"
    )

    if path is MenuSignal.CANCEL:
        return
    path = os.path.abspath(os.path.expanduser(cast(str, path)))

    if not os.path.isfile(path):
        print(f"\nFile not found: {path}")
        return

    helpers.caution_banner()
    print(f"Importing will replace all {len(roster)} students currently on the roster.")

    if not helpers.confirm_action("Do you want to continue?"):
        helpers.returning_without_changes()
        return

    helpers.display_write_outcome(asyncio.run(roster.import_from_file(path)))


# === backup & clear ===


def restore_backup(roster: Roster) -> None:
    if not roster.storage.has_backup():
        print("\nNo backup is available.")
        return

    helpers.caution_banner()
    print("Restoring will replace the current roster with the most recent backup.")

    if not helpers.confirm_action("Do you want to continue?"):
        helpers.returning_without_changes()
        return

    restore_response = roster.restore_from_backup()

    if not restore_response.success:
        helpers.display_response_failure(restore_response)
        return

    print(f"\n{restore_response.detail} {restore_response.data['count']} students restored.")


def clear_all_data(roster: Roster) -> None:
    helpers.caution_banner()
    print(f"You are about to remove all {len(roster)} students from the roster.")
    print("The current data will be kept as a backup and can be restored afterwards.")

    if not helpers.confirm_action("Are you sure you want to clear all data?"):
        helpers.returning_without_changes()
        return

    helpers.display_write_outcome(roster.clear_all())


def save_roster(roster: Roster) -> None:
    save_response = roster.save()

    if not save_response.success:
        helpers.display_response_failure(save_response)
        return

    print(f"\n{save_response.detail}")
