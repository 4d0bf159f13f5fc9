# tests/test_cli.py

import logging
import os

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
from cli.main import configure_logging, storage_quota
from cli.menu_helpers import MenuSignal
from cli.menus.students_menu import parse_field_input
from cli.path_utils import get_data_dir, resolve_data_dir, resolve_export_dir
from core.search import linear_search
from core.sort import bubble_sort
from models.roster import Roster


def feed_input(monkeypatch, *answers):
    responses = iter(answers)
    monkeypatch.setattr("builtins.input", lambda _: next(responses))


# === paths and environment ===


def test_get_data_dir_prefers_user_input(tmp_path):
    assert get_data_dir(str(tmp_path), {"ROSTER_DATA_DIR": "/elsewhere"}) == str(tmp_path)


def test_get_data_dir_uses_environment():
    assert get_data_dir(None, {"ROSTER_DATA_DIR": "/srv/roster"}) == "/srv/roster"
    assert get_data_dir("   ", {"ROSTER_DATA_DIR": "/srv/roster"}) == "/srv/roster"


def test_get_data_dir_default():
    expected = os.path.join(os.path.expanduser("~"), "Documents", "StudentRoster")
    assert get_data_dir(None, {}) == expected


def test_resolve_data_dir_creates_directory(tmp_path):
    target = tmp_path / "nested" / "roster"

    assert resolve_data_dir(str(target), {}) == str(target)
    assert target.is_dir()


def test_resolve_export_dir(tmp_path, directory_storage, sample_roster):
    roster = Roster(directory_storage)

    assert resolve_export_dir(roster, None) == str(tmp_path)
    assert resolve_export_dir(roster, str(tmp_path / "exports")) == str(tmp_path / "exports")
    assert resolve_export_dir(sample_roster, None) == os.getcwd()


def test_configure_logging_levels():
    assert configure_logging({"ROSTER_LOG_LEVEL": "debug"}) == logging.DEBUG
    assert configure_logging({"ROSTER_LOG_LEVEL": "chatty"}) == logging.WARNING
    assert configure_logging({}) == logging.WARNING


def test_storage_quota():
    assert storage_quota({}) is None
    assert storage_quota({"ROSTER_STORAGE_QUOTA": "5000000"}) == 5000000
    assert storage_quota({"ROSTER_STORAGE_QUOTA": "lots"}) is None


# === prompts ===


def test_display_menu_returns_selected_action(monkeypatch):
    feed_input(monkeypatch, "9", "abc", "2")
    options = [("First", lambda: "first"), ("Second", lambda: "second")]

    action = helpers.display_menu("Title", options)

    assert action() == "second"


def test_display_menu_exit(monkeypatch):
    feed_input(monkeypatch, "0")

    assert helpers.display_menu("Title", [("Only", lambda: None)]) is MenuSignal.EXIT


def test_confirm_action(monkeypatch):
    feed_input(monkeypatch, "maybe", "Y")
    assert helpers.confirm_action("Continue?")

    feed_input(monkeypatch, "no")
    assert not helpers.confirm_action("Continue?")


def test_prompt_choice(monkeypatch):
    feed_input(monkeypatch, "")
    assert helpers.prompt_choice("Order?", ["asc", "desc"], "asc") == "asc"

    feed_input(monkeypatch, "sideways", "DESC")
    assert helpers.prompt_choice("Order?", ["asc", "desc"], "asc") == "desc"


def test_find_student_by_search(monkeypatch, populated_roster):
    feed_input(monkeypatch, "jurusan", "informatika", "2")

    student = helpers.find_student_by_search(populated_roster)

    assert student.nim == "IF002"


def test_find_student_by_search_no_results(monkeypatch, populated_roster):
    feed_input(monkeypatch, "", "zzz")

    assert helpers.find_student_by_search(populated_roster) is MenuSignal.CANCEL


def test_parse_field_input():
    assert parse_field_input("semester", "7") == 7
    assert parse_field_input("ipk", "3.25") == 3.25
    assert parse_field_input("ipk", "high") == "high"
    assert parse_field_input("nama", "Budi") == "Budi"


# === formatters ===


def test_format_student_oneline(sample_student, sample_graduate_student):
    line = model_formatters.format_student_oneline(sample_student)

    assert line.startswith("IF123456")
    assert "IPK 3.45" in line
    assert "[GRADUATE]" not in line
    assert "[GRADUATE]" in model_formatters.format_student_oneline(sample_graduate_student)


def test_format_student_multiline(sample_graduate_student):
    text = model_formatters.format_student_multiline(sample_graduate_student)

    assert text.startswith("Graduate student:")
    assert "... NIM: MI2001" in text
    assert text.endswith("... Thesis: Graph Neural Networks for Course Scheduling")


def test_format_search_result(sample_student):
    found = model_formatters.format_search_result(linear_search([sample_student], "budi", "nama"))
    missing = model_formatters.format_search_result(linear_search([sample_student], "x", "nama"))

    assert found.startswith("Linear Search [O(n)] - 1 comparisons - found at position 1")
    assert missing.endswith("no match")


def test_format_sort_result():
    text = model_formatters.format_sort_result(bubble_sort([{"ipk": 3.0}, {"ipk": 2.0}, {"ipk": 3.5}], "ipk"))

    assert text.startswith("Bubble Sort")
    assert "comparisons     3" in text
    assert "space O(1)" in text


def test_display_response_failure_lists_fields(capsys, sample_roster, make_student_data):
    response = sample_roster.add_student(make_student_data(nama="B", semester=15))

    helpers.display_response_failure(response)

    output = capsys.readouterr().out
    assert "[ERROR: INVALID_FIELD_VALUE] Name must be at least 2 characters." in output
    assert "Fields to correct: nama and semester" in output


def test_display_response_failure_debug_trace(capsys, populated_roster):
    response = populated_roster.get_records(lambda s: s.missing_attribute)

    helpers.display_response_failure(response, debug=False)
    assert "Debug Trace" not in capsys.readouterr().out

    helpers.display_response_failure(response, debug=True)
    output = capsys.readouterr().out
    assert "[ERROR: INTERNAL_ERROR]" in output
    assert "Debug Trace" in output
    assert "AttributeError" in output
