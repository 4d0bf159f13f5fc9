# core/sort.py

"""
Sorting algorithms over a collection of student records.

Five comparison sorts (bubble, selection, insertion, shell, and merge) share one signature:
`(collection, field, order="asc") -> SortResult`. Each works on a copy of the input and reports
its comparison and swap counts together with its declared time and space complexity.

Values of numeric fields (semester, ipk) compare as numbers, numeric strings included, and
sort ahead of any value that is not a number. Everything else compares as lower-cased strings
using plain ordinal comparison.

Only merge sort's stability is guaranteed. The other algorithms happen to keep equal keys in
input order with the swap and shift patterns used here, but callers should not rely on it.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Sequence

from core.records import (
    NUMERIC_FIELDS,
    coerce_number,
    get_field_value,
    require_field_selector,
    require_sort_order,
)


class SortResult:
    """
    Outcome of a sort.

    Attributes:
        sorted_data (list[Any]): A new list holding the sorted records.
        comparisons (int): Number of key comparisons performed.
        swaps (int): Number of swaps, shifts, or merge writes performed.
        time_complexity (dict[str, str]): Declared "best", "average", and "worst" time complexity.
        space_complexity (str): Declared auxiliary space.
        algorithm (str): Display name of the algorithm.
    """

    def __init__(
        self,
        sorted_data: list[Any],
        comparisons: int,
        swaps: int,
        time_complexity: dict[str, str],
        space_complexity: str,
        algorithm: str,
    ):
        self.sorted_data = sorted_data
        self.comparisons = comparisons
        self.swaps = swaps
        self.time_complexity = time_complexity
        self.space_complexity = space_complexity
        self.algorithm = algorithm

    def to_dict(self) -> dict:
        return {
            "sorted_data": self.sorted_data,
            "comparisons": self.comparisons,
            "swaps": self.swaps,
            "time_complexity": dict(self.time_complexity),
            "space_complexity": self.space_complexity,
            "algorithm": self.algorithm,
        }

    def __repr__(self) -> str:
        return f"SortResult({self.algorithm}, n={len(self.sorted_data)}, comparisons={self.comparisons}, swaps={self.swaps})"


def _complexity(best: str, average: str, worst: str) -> dict[str, str]:
    return {"best": best, "average": average, "worst": worst}


# === helpers ===


def sort_key(record: Any, field: str) -> tuple[int, Any]:
    """
    Builds a comparison key that is safe across mixed value types.

    Numeric fields yield `(0, number)`, where numeric strings such as "2.0" are read as numbers.
    Anything else yields `(1, lowered_text)`, so unparseable values sort after every number.
    """
    value = get_field_value(record, field)

    if field in NUMERIC_FIELDS:
        number = coerce_number(value)
        if number is not None:
            return (0, number)

    return (1, str(value).lower())


def _out_of_order(a: Any, b: Any, order: str) -> bool:
    """
    True if `a` must come after `b` under the requested order.
    """
    return a > b if order == "asc" else a < b


def _prepare(collection: Sequence[Any], field: str, order: str) -> list[Any]:
    require_field_selector(field)
    require_sort_order(order)
    return list(collection)


# === sorting algorithms ===


def bubble_sort(
    collection: Sequence[Any], field: str, order: str = "asc"
) -> SortResult:
    """
    Repeatedly swaps adjacent out-of-order records; stops after the first pass without a swap.

    Time complexity: best O(n) on sorted input, average and worst O(n²). Space O(1).
    """
    data = _prepare(collection, field, order)
    comparisons = 0
    swaps = 0
    n = len(data)

    for i in range(n - 1):
        swapped = False

        for j in range(n - i - 1):
            comparisons += 1

            if _out_of_order(sort_key(data[j], field), sort_key(data[j + 1], field), order):
                data[j], data[j + 1] = data[j + 1], data[j]
                swaps += 1
                swapped = True

        if not swapped:
            break

    return SortResult(
        sorted_data=data,
        comparisons=comparisons,
        swaps=swaps,
        time_complexity=_complexity("O(n)", "O(n²)", "O(n²)"),
        space_complexity="O(1)",
        algorithm="Bubble Sort",
    )


def selection_sort(
    collection: Sequence[Any], field: str, order: str = "asc"
) -> SortResult:
    """
    Selects the extreme of the unplaced suffix for each position, swapping at most once per position.

    Time complexity O(n²) in every case. Space O(1).
    """
    data = _prepare(collection, field, order)
    comparisons = 0
    swaps = 0
    n = len(data)

    for i in range(n - 1):
        selected = i

        for j in range(i + 1, n):
            comparisons += 1

            if _out_of_order(sort_key(data[selected], field), sort_key(data[j], field), order):
                selected = j

        if selected != i:
            data[i], data[selected] = data[selected], data[i]
            swaps += 1

    return SortResult(
        sorted_data=data,
        comparisons=comparisons,
        swaps=swaps,
        time_complexity=_complexity("O(n²)", "O(n²)", "O(n²)"),
        space_complexity="O(1)",
        algorithm="Selection Sort",
    )


def insertion_sort(
    collection: Sequence[Any], field: str, order: str = "asc"
) -> SortResult:
    """
    Grows a sorted prefix, shifting records one slot right until the current key's slot is found.

    Each shift counts as a swap. Time complexity: best O(n), average and worst O(n²). Space O(1).
    """
    data = _prepare(collection, field, order)
    comparisons = 0
    swaps = 0

    for i in range(1, len(data)):
        current = data[i]
        current_key = sort_key(current, field)
        j = i - 1

        while j >= 0:
            comparisons += 1

            if not _out_of_order(sort_key(data[j], field), current_key, order):
                break

            data[j + 1] = data[j]
            swaps += 1
            j -= 1

        data[j + 1] = current

    return SortResult(
        sorted_data=data,
        comparisons=comparisons,
        swaps=swaps,
        time_complexity=_complexity("O(n)", "O(n²)", "O(n²)"),
        space_complexity="O(1)",
        algorithm="Insertion Sort",
    )


def shell_sort(
    collection: Sequence[Any], field: str, order: str = "asc"
) -> SortResult:
    """
    Gap-insertion sort over the gap sequence n // 2, gap // 2, ..., 1.

    Time complexity: best O(n log n), average O(n log²n), worst O(n²). Space O(1).
    """
    data = _prepare(collection, field, order)
    comparisons = 0
    swaps = 0
    n = len(data)
    gap = n // 2

    while gap > 0:
        for i in range(gap, n):
            current = data[i]
            current_key = sort_key(current, field)
            j = i

            while j >= gap:
                comparisons += 1

                if not _out_of_order(sort_key(data[j - gap], field), current_key, order):
                    break

                data[j] = data[j - gap]
                swaps += 1
                j -= gap

            data[j] = current

        gap //= 2

    return SortResult(
        sorted_data=data,
        comparisons=comparisons,
        swaps=swaps,
        time_complexity=_complexity("O(n log n)", "O(n log²n)", "O(n²)"),
        space_complexity="O(1)",
        algorithm="Shell Sort",
    )


def merge_sort(
    collection: Sequence[Any], field: str, order: str = "asc"
) -> SortResult:
    """
    Recursive halve-and-merge sort.

    Stable in both directions: on equal keys the record from the left half is emitted first.
    Every record written during a merge comparison counts as a swap.
    Time complexity O(n log n) in every case. Space O(n).
    """
    data = _prepare(collection, field, order)
    counters = {"comparisons": 0, "swaps": 0}

    def merge(left: list[Any], right: list[Any]) -> list[Any]:
        merged = []
        l = r = 0

        while l < len(left) and r < len(right):
            counters["comparisons"] += 1
            left_key = sort_key(left[l], field)
            right_key = sort_key(right[r], field)

            left_first = left_key <= right_key if order == "asc" else left_key >= right_key

            if left_first:
                merged.append(left[l])
                l += 1
            else:
                merged.append(right[r])
                r += 1

            counters["swaps"] += 1

        return merged + left[l:] + right[r:]

    def split(items: list[Any]) -> list[Any]:
        if len(items) <= 1:
            return items

        mid = len(items) // 2

        return merge(split(items[:mid]), split(items[mid:]))

    return SortResult(
        sorted_data=split(data),
        comparisons=counters["comparisons"],
        swaps=counters["swaps"],
        time_complexity=_complexity("O(n log n)", "O(n log n)", "O(n log n)"),
        space_complexity="O(n)",
        algorithm="Merge Sort",
    )


SORT_ALGORITHMS: dict[str, Callable[..., SortResult]] = {
    "bubble": bubble_sort,
    "selection": selection_sort,
    "insertion": insertion_sort,
    "shell": shell_sort,
    "merge": merge_sort,
}


def sort_by(
    algorithm: str, collection: Sequence[Any], field: str, order: str = "asc"
) -> SortResult:
    """
    Dispatches to a sorting algorithm by its registry name (e.g. "bubble", "merge").

    Raises:
        ValueError: If the algorithm name, field, or order is unknown.
    """
    try:
        sort_fn = SORT_ALGORITHMS[algorithm]
    except KeyError:
        raise ValueError(
            f"Unknown sorting algorithm '{algorithm}'. Expected one of: {', '.join(SORT_ALGORITHMS)}."
        )

    return sort_fn(collection, field, order)


def compare_sort_algorithms(
    collection: Sequence[Any], field: str, order: str = "asc"
) -> dict[str, SortResult]:
    """
    Runs every algorithm on the same input and returns their results keyed by registry name.
    """
    return {
        name: sort_fn(collection, field, order)
        for name, sort_fn in SORT_ALGORITHMS.items()
    }
