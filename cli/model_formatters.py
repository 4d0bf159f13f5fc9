# cli/model_formatters.py

# anything that renders domain objects or algorithm results
from textwrap import dedent

import core.formatters as formatters
from core.search import MultiSearchResult, SearchComparison, SearchResult
from core.sort import SortResult
from models.student import Student

# === student formatters ===


def format_student_oneline(student: Student) -> str:
    graduate = " [GRADUATE]" if student.is_graduate else ""

    return (
        f"{student.nim:<12} | {student.nama:<25} | {student.jurusan:<20} | "
        f"Sem {student.semester:>2} | IPK {formatters.format_ipk(student.ipk)}{graduate}"
    )


def format_student_multiline(student: Student) -> str:
    thesis = f"\n... Thesis: {student.thesis}" if student.is_graduate else ""

    return dedent(
        f"""\
        {student.kind.value} student:
        ... NIM: {student.nim}
        ... Name: {student.nama}
        ... Email: {student.email}
        ... Department: {student.jurusan}
        ... Semester: {student.semester}
        ... IPK: {formatters.format_ipk(student.ipk)}
        ... Enrolled: {student.tanggal_masuk}"""
    ) + thesis


# === algorithm result formatters ===


def format_search_result(result: SearchResult) -> str:
    outcome = (
        f"found at position {result.index + 1}: {format_student_oneline(result.record)}"
        if result.found
        else "no match"
    )

    return f"{result.algorithm} [{result.time_complexity}] - {result.comparisons} comparisons - {outcome}"


def format_multi_search_result(result: MultiSearchResult) -> str:
    return f"{result.algorithm} [{result.time_complexity}] - {result.comparisons} comparisons - {len(result)} matches"


def format_search_comparison(comparison: SearchComparison) -> str:
    return dedent(
        f"""\
        Data size: {comparison.data_size}
        ... {format_search_result(comparison.linear)}
        ... {format_search_result(comparison.binary)}"""
    )


def format_sort_result(result: SortResult) -> str:
    complexity = result.time_complexity

    return (
        f"{result.algorithm:<15} | comparisons {result.comparisons:>5} | swaps {result.swaps:>5} | "
        f"best {complexity['best']}, avg {complexity['average']}, worst {complexity['worst']} | "
        f"space {result.space_complexity}"
    )
