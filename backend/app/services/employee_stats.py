"""
Aggregate queries over an in-memory list of employees.

Pure functions, no I/O. The employee service fetches the full list from the
upstream and hands it to these helpers.
"""

from typing import List, Sequence

from app.models.employee import Employee

TOP_EARNERS_LIMIT = 10


def filter_by_name(employees: Sequence[Employee], name: str) -> List[Employee]:
    """
    Return employees whose name equals ``name``, ignoring case.

    Exact match only: "ann" matches "Ann" and "ANN" but not "Anna".
    """
    wanted = name.casefold()
    return [e for e in employees if e.name.casefold() == wanted]


def highest_salary(employees: Sequence[Employee]) -> int:
    """Return the largest salary, or 0 when there are no employees."""
    return max((e.salary for e in employees), default=0)


def top_earning_names(
    employees: Sequence[Employee],
    limit: int = TOP_EARNERS_LIMIT,
) -> List[str]:
    """
    Return the names of the ``limit`` best-paid employees, highest first.

    sorted() is stable, so employees with equal salaries keep the order the
    upstream returned them in.
    """
    if limit <= 0:
        return []
    ranked = sorted(employees, key=lambda e: e.salary, reverse=True)
    return [e.name for e in ranked[:limit]]
