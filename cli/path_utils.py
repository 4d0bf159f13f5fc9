# cli/path_utils.py

import os

from models.roster import Roster

DATA_DIR_ENV = "ROSTER_DATA_DIR"


def get_data_dir(user_input: str | None, environ: dict[str, str] | None = None) -> str:
    """
    Resolves the directory that holds roster data, based on user input, the environment, or the default location.

    Args:
        user_input (str | None): An optional user-specified directory path. If None, the environment is consulted.
        environ (dict[str, str] | None): The environment to read `ROSTER_DATA_DIR` from. Defaults to `os.environ`.

    Returns:
        An expanded path string. User input wins over `ROSTER_DATA_DIR`.
        Otherwise, defaults to: `~/Documents/StudentRoster`.
    """
    if environ is None:
        environ = dict(os.environ)

    if user_input is not None and user_input.strip():
        return os.path.expanduser(user_input.strip())

    if environ.get(DATA_DIR_ENV):
        return os.path.expanduser(environ[DATA_DIR_ENV])

    documents = os.path.join(os.path.expanduser("~"), "Documents")
    return os.path.join(documents, "StudentRoster")


def resolve_data_dir(dir_input: str | None, environ: dict[str, str] | None = None) -> str:
    """
    Produces and ensures a valid data directory path for the roster.

    Notes:
        - Creates the directory path on disk (including parent directories) if it does not exist.
    """
    data_dir = os.path.abspath(get_data_dir(dir_input, environ))

    os.makedirs(data_dir, exist_ok=True)

    return data_dir


def resolve_export_dir(roster: Roster, dir_input: str | None) -> str:
    """
    Returns the directory an export is written to: the user's input if given, else the roster's data directory.

    Notes:
        - Falls back to the current working directory when the roster is not backed by a directory store.
    """
    if dir_input is not None and dir_input.strip():
        export_dir = os.path.abspath(os.path.expanduser(dir_input.strip()))
        os.makedirs(export_dir, exist_ok=True)
        return export_dir

    return getattr(roster.storage.store, "dir_path", os.getcwd())


def dir_is_empty(dir_path: str) -> bool:
    """
    Checks whether a directory exists and contains no files.

    Returns:
        True if the path exists, is a directory, and contains no files or subdirectories. False otherwise.
    """
    return os.path.isdir(dir_path) and not os.listdir(dir_path)
