# cli/main.py

"""
Start-up for the Student Roster CLI.

Configures logging, resolves the data directory, loads the roster from it, and hands off to the Roster Manager menu.

Environment:
    ROSTER_DATA_DIR: Default data directory when none is entered at the prompt.
    ROSTER_LOG_LEVEL: Logging level name (e.g. DEBUG, INFO). Defaults to WARNING.
    ROSTER_STORAGE_QUOTA: Optional maximum number of characters the data directory may hold.
"""

import logging
import os

import cli.menu_helpers as helpers
import core.formatters as formatters
from cli.menus import roster_menu
from cli.path_utils import dir_is_empty, resolve_data_dir
from core.persistence import StudentStorage
from core.storage import DirectoryStore
from models.roster import Roster

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(environ: dict[str, str] | None = None) -> int:
    """
    Configures root logging from `ROSTER_LOG_LEVEL` and returns the level used.

    Notes:
        - Unknown level names fall back to WARNING.
    """
    if environ is None:
        environ = dict(os.environ)

    level_name = environ.get("ROSTER_LOG_LEVEL", "WARNING").upper()
    level = logging.getLevelName(level_name)

    if not isinstance(level, int):
        level = logging.WARNING

    logging.basicConfig(level=level, format=LOG_FORMAT)

    return level


def storage_quota(environ: dict[str, str] | None = None) -> int | None:
    if environ is None:
        environ = dict(os.environ)

    raw = environ.get("ROSTER_STORAGE_QUOTA")

    if not raw:
        return None

    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring invalid ROSTER_STORAGE_QUOTA value: %r", raw)
        return None


def run_cli() -> None:
    """
    Loads the roster and runs the Roster Manager menu until the user exits.
    """
    configure_logging()

    title = formatters.format_banner_text("STUDENT ROSTER MANAGER")
    print(f"\n{title}")

    roster = load_roster()

    if roster is not None:
        roster_menu.run(roster)

    exit_program()


def load_roster() -> Roster | None:
    """
    Prompts for a data directory and loads the `Roster` stored there.

    Returns:
        Roster: The loaded `Roster`, which is empty if the directory holds no data yet.
        None: If the user declines to retry after a failed load.

    Notes:
        - A blank directory input uses `ROSTER_DATA_DIR`, or `~/Documents/StudentRoster` if that is unset.
        - Unreadable data is reported; the user may retry with another directory.
    """
    while True:
        dir_input = helpers.prompt_user_input_or_none(
            "Enter the data directory (leave blank to use default):"
        )

        dir_path = resolve_data_dir(dir_input)

        if dir_is_empty(dir_path):
            print(f"\nNo roster data found in {dir_path}. Starting with an empty roster.")

        storage = StudentStorage(DirectoryStore(dir_path, quota=storage_quota()))

        print("\nLoading roster ...")

        roster_response = Roster.load(storage)

        if not roster_response.success:
            helpers.display_response_failure(roster_response)

            if helpers.confirm_action("Would you like to try another directory?"):
                continue

            return None

        roster = roster_response.data["roster"]

        print(f"... {len(roster)} students loaded from {dir_path}.")

        return roster


def exit_program():
    """
    Displays an exit banner and terminates the CLI program.

    Raises:
        SystemExit: Always raised to immediately terminate execution.
    """
    exit_banner = formatters.format_banner_text("Exiting Program")
    print(f"\n{exit_banner}\n")

    raise SystemExit


if __name__ == "__main__":
    run_cli()
