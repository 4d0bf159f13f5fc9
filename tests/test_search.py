# tests/test_search.py

import pytest

from core.search import (
    binary_search,
    compare_search_algorithms,
    linear_search,
    linear_search_all,
    sequential_search_with_pattern,
    sort_for_binary_search,
)


@pytest.fixture
def records():
    return [
        {"nim": "SI003", "nama": "Budi Santoso", "jurusan": "Sistem Informasi", "ipk": 3.9},
        {"nim": "IF001", "nama": "Citra Dewi", "jurusan": "Informatika", "ipk": 3.5},
        {"nim": "IF002", "nama": "Andi Budiman", "jurusan": "Informatika", "ipk": 2.75},
    ]


# === linear search ===


def test_linear_search_finds_first_match(records):
    result = linear_search(records, "BUDI", "nama")

    assert result.found
    assert result.index == 0
    assert result.record["nim"] == "SI003"
    assert result.comparisons == 1
    assert result.time_complexity == "O(n)"
    assert result.algorithm == "Linear Search"


def test_linear_search_not_found_scans_everything(records):
    result = linear_search(records, "zzz", "nama")

    assert not result.found
    assert result.index == -1
    assert result.record is None
    assert result.comparisons == 3


def test_linear_search_numeric_field(records):
    result = linear_search(records, "2.75", "ipk")

    assert result.found
    assert result.record["nim"] == "IF002"


def test_linear_search_all_preserves_order(records):
    result = linear_search_all(records, "budi", "nama")

    assert [r["nim"] for r in result.results] == ["SI003", "IF002"]
    assert len(result) == 2
    assert result.comparisons == 3


def test_unknown_field_raises(records):
    with pytest.raises(ValueError):
        linear_search(records, "x", "alamat")


# === binary search ===


def test_sort_for_binary_search(records):
    sorted_records = sort_for_binary_search(records, "nim")

    assert [r["nim"] for r in sorted_records] == ["IF001", "IF002", "SI003"]
    assert [r["nim"] for r in records] == ["SI003", "IF001", "IF002"]


def test_binary_search_found(records):
    sorted_records = sort_for_binary_search(records, "nim")

    result = binary_search(sorted_records, "if002", "nim")

    assert result.found
    assert result.index == 1
    assert result.record["nim"] == "IF002"
    assert result.comparisons == 1
    assert result.time_complexity == "O(log n)"


def test_binary_search_absent(records):
    sorted_records = sort_for_binary_search(records, "nim")

    result = binary_search(sorted_records, "ZZ999", "nim")

    assert not result.found
    assert result.index == -1
    assert result.comparisons == 2


def test_binary_search_empty():
    result = binary_search([], "IF001", "nim")

    assert not result.found
    assert result.comparisons == 0


# === pattern search ===


def test_sequential_search_with_pattern_counts_windows():
    records = [{"nama": "Abc"}, {"nama": "Xbc"}, {"nama": "A"}]

    result = sequential_search_with_pattern(records, "BC", "nama")

    assert [r["nama"] for r in result.results] == ["Abc", "Xbc"]
    # 3 per matching record (1 visit + 2 windows), 1 for the record shorter than the pattern
    assert result.comparisons == 7
    assert result.time_complexity == "O(n * m)"


# === comparison ===


def test_compare_search_algorithms(records):
    comparison = compare_search_algorithms(records, "IF002", "nim")

    assert comparison.data_size == 3
    assert comparison.linear.found
    assert comparison.linear.index == 2
    assert comparison.binary.found
    assert comparison.binary.index == 1


def test_search_result_to_dict(records):
    data = linear_search(records, "citra", "nama").to_dict()

    assert data["found"]
    assert data["index"] == 1
    assert data["algorithm"] == "Linear Search"


def test_whole_float_matches_integer_query():
    records = sort_for_binary_search([{"nim": "A", "ipk": 3.5}, {"nim": "B", "ipk": 3.0}], "ipk")

    assert binary_search(records, "3", "ipk").record["nim"] == "B"
    assert linear_search(records, "3", "ipk").record["nim"] == "B"
