# core/search.py

"""
Search algorithms over a collection of student records.

Every search reports how many comparisons it made and declares its time complexity, so results
from different algorithms over the same data can be shown side by side.

Matching is case-insensitive: the field value is stringified and lower-cased, as is the query.
Searches never mutate their input.
"""

from __future__ import annotations

from typing import Any, Sequence

from core.records import get_field_value, require_field_selector


class SearchResult:
    """
    Outcome of a single-match search.

    Attributes:
        found (bool): Whether a matching record was found.
        index (int): Position of the match in the searched collection, or -1.
        record (Any | None): The matching record, or None.
        comparisons (int): Number of comparisons performed.
        time_complexity (str): Declared complexity, e.g. "O(n)".
        algorithm (str): Display name of the algorithm.
    """

    def __init__(
        self,
        found: bool,
        index: int,
        record: Any | None,
        comparisons: int,
        time_complexity: str,
        algorithm: str,
    ):
        self.found = found
        self.index = index
        self.record = record
        self.comparisons = comparisons
        self.time_complexity = time_complexity
        self.algorithm = algorithm

    @classmethod
    def not_found(
        cls, comparisons: int, time_complexity: str, algorithm: str
    ) -> SearchResult:
        return cls(False, -1, None, comparisons, time_complexity, algorithm)

    def to_dict(self) -> dict:
        return {
            "found": self.found,
            "index": self.index,
            "record": self.record,
            "comparisons": self.comparisons,
            "time_complexity": self.time_complexity,
            "algorithm": self.algorithm,
        }

    def __repr__(self) -> str:
        return f"SearchResult({self.algorithm}, found={self.found}, index={self.index}, comparisons={self.comparisons})"


class MultiSearchResult:
    """
    Outcome of a search that collects every match.

    Attributes:
        results (list[Any]): Matching records, in their original order.
        comparisons (int): Number of comparisons performed.
        time_complexity (str): Declared complexity.
        algorithm (str): Display name of the algorithm.
    """

    def __init__(
        self,
        results: list[Any],
        comparisons: int,
        time_complexity: str,
        algorithm: str,
    ):
        self.results = results
        self.comparisons = comparisons
        self.time_complexity = time_complexity
        self.algorithm = algorithm

    def __len__(self) -> int:
        return len(self.results)

    def __repr__(self) -> str:
        return f"MultiSearchResult({self.algorithm}, matches={len(self.results)}, comparisons={self.comparisons})"


class SearchComparison:
    """
    Side-by-side results of linear and binary search over the same data set.
    """

    def __init__(self, linear: SearchResult, binary: SearchResult, data_size: int):
        self.linear = linear
        self.binary = binary
        self.data_size = data_size

    def __repr__(self) -> str:
        return f"SearchComparison(linear={self.linear!r}, binary={self.binary!r}, data_size={self.data_size})"


# === helpers ===


def _normalized(record: Any, field: str) -> str:
    value = get_field_value(record, field)

    # whole floats read as integers, so an IPK of 3.0 matches the query "3"
    if isinstance(value, float) and value.is_integer():
        value = int(value)

    return str(value).lower()


def sort_for_binary_search(collection: Sequence[Any], field: str) -> list[Any]:
    """
    Returns a copy of the collection sorted ascending by the lower-cased field value.

    The sort is stable, and it uses the same ordering `binary_search()` bisects on,
    so its output always satisfies the binary search precondition.
    """
    require_field_selector(field)
    return sorted(collection, key=lambda record: _normalized(record, field))


# === search algorithms ===


def linear_search(collection: Sequence[Any], query: str, field: str) -> SearchResult:
    """
    Scans records in order and returns the first whose field contains the query.

    Args:
        collection (Sequence[Any]): The records to search.
        query (str): The substring to look for.
        field (str): The field selector to search on.

    Returns:
        SearchResult: The first match and its position, or a not-found result.
        `comparisons` counts every position scanned, including the match.

    Notes:
        - Time complexity O(n), space O(1).
    """
    require_field_selector(field)
    search = query.lower()
    comparisons = 0

    for i, record in enumerate(collection):
        comparisons += 1

        if search in _normalized(record, field):
            return SearchResult(True, i, record, comparisons, "O(n)", "Linear Search")

    return SearchResult.not_found(comparisons, "O(n)", "Linear Search")


def linear_search_all(
    collection: Sequence[Any], query: str, field: str
) -> MultiSearchResult:
    """
    Returns every record whose field contains the query, preserving the original order.
    """
    require_field_selector(field)
    search = query.lower()
    results = []
    comparisons = 0

    for record in collection:
        comparisons += 1

        if search in _normalized(record, field):
            results.append(record)

    return MultiSearchResult(results, comparisons, "O(n)", "Linear Search")


def binary_search(collection: Sequence[Any], query: str, field: str) -> SearchResult:
    """
    Finds a record whose field exactly equals the query (case-insensitive) by midpoint bisection.

    Args:
        collection (Sequence[Any]): The records to search, already sorted ascending by the
            lower-cased value of `field` (see `sort_for_binary_search()`).
        query (str): The exact value to look for.
        field (str): The field selector to search on.

    Returns:
        SearchResult: The first exact match the bisection lands on, or a not-found result.

    Notes:
        - This function does not sort. Unsorted input gives unspecified results.
        - Time complexity O(log n), space O(1).
    """
    require_field_selector(field)
    search = query.lower()
    comparisons = 0
    left = 0
    right = len(collection) - 1

    while left <= right:
        mid = (left + right) // 2
        comparisons += 1

        value = _normalized(collection[mid], field)

        if value == search:
            return SearchResult(
                True, mid, collection[mid], comparisons, "O(log n)", "Binary Search"
            )

        if value < search:
            left = mid + 1
        else:
            right = mid - 1

    return SearchResult.not_found(comparisons, "O(log n)", "Binary Search")


def sequential_search_with_pattern(
    collection: Sequence[Any], pattern: str, field: str
) -> MultiSearchResult:
    """
    Collects records whose field contains the pattern, using a naive sliding-window match.

    Each record visited costs one comparison, and every window position tried costs one more.
    Time complexity O(n * m), where m is the pattern length.
    """
    require_field_selector(field)
    lower_pattern = pattern.lower()
    width = len(lower_pattern)
    results = []
    comparisons = 0

    for record in collection:
        value = _normalized(record, field)
        comparisons += 1

        for start in range(len(value) - width + 1):
            comparisons += 1

            if value[start : start + width] == lower_pattern:
                results.append(record)
                break

    return MultiSearchResult(
        results, comparisons, "O(n * m)", "Sequential Pattern Search"
    )


def compare_search_algorithms(
    collection: Sequence[Any], query: str, field: str
) -> SearchComparison:
    """
    Runs linear search on the collection as given and binary search on a sorted copy.

    Returns:
        SearchComparison: Both results plus the size of the data set, for comparing comparison counts.
    """
    sorted_collection = sort_for_binary_search(collection, field)

    return SearchComparison(
        linear=linear_search(collection, query, field),
        binary=binary_search(sorted_collection, query, field),
        data_size=len(collection),
    )
