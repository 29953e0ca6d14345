# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Kindred Contributors

"""Genealogical plausibility warnings.

These never block an edge: historical records are messy and researchers
often enter partial or estimated dates. Warnings are returned with the
saved relationship so the client can ask the user to double check.
"""

from __future__ import annotations

from datetime import date, timedelta

from kindred.models.person import Person
from kindred.models.relationship import RelationshipType

MIN_PARENT_AGE = 12  # years at the child's birth
MAX_PARENT_AGE = 80
MIN_MARRIAGE_AGE = 14
# A father may die before his child is born; allow up to a year
POSTHUMOUS_BIRTH_MARGIN = timedelta(days=365)


def _years_between(earlier: date, later: date) -> float:
    return (later - earlier).days / 365.25


def parent_child_warnings(parent: Person, child: Person) -> list[str]:
    warnings: list[str] = []
    if parent.birth_date and child.birth_date:
        if parent.birth_date >= child.birth_date:
            warnings.append("Parent must be born before child")
        else:
            age = _years_between(parent.birth_date, child.birth_date)
            if age < MIN_PARENT_AGE:
                warnings.append(
                    f"Parent-child age difference ({round(age)} years) is unusually small. "
                    f"Parent would have been under {MIN_PARENT_AGE} years old."
                )
            elif age > MAX_PARENT_AGE:
                warnings.append(
                    f"Parent-child age difference ({round(age)} years) is unusually large. "
                    f"Parent would have been over {MAX_PARENT_AGE} years old."
                )
    if parent.death_date and child.birth_date:
        if child.birth_date > parent.death_date + POSTHUMOUS_BIRTH_MARGIN:
            warnings.append(
                f"{child.first_name} was born more than a year after "
                f"{parent.first_name}'s death"
            )
    return warnings


def marriage_warnings(
    spouse_a: Person,
    spouse_b: Person,
    start_date: date | None,
    end_date: date | None,
    today: date | None = None,
) -> list[str]:
    today = today or date.today()
    warnings: list[str] = []

    if start_date is not None:
        if start_date > today:
            warnings.append("Marriage date is in the future")
        for spouse in (spouse_a, spouse_b):
            if spouse.birth_date and start_date < spouse.birth_date:
                warnings.append(f"Marriage date is before {spouse.first_name}'s birth date")
            elif spouse.birth_date:
                age = _years_between(spouse.birth_date, start_date)
                if age < MIN_MARRIAGE_AGE:
                    warnings.append(
                        f"{spouse.first_name}'s age at marriage ({round(age)} years) "
                        "is unusually young"
                    )
            if spouse.death_date and start_date > spouse.death_date:
                warnings.append(f"Marriage date is after {spouse.first_name}'s death date")

    if end_date is not None:
        if end_date > today:
            warnings.append("Divorce date is in the future")
        for spouse in (spouse_a, spouse_b):
            if spouse.death_date and end_date > spouse.death_date:
                warnings.append(f"Divorce date is after {spouse.first_name}'s death date")

    return warnings


def relationship_warnings(
    relationship_type: RelationshipType | str,
    subject: Person,
    obj: Person,
    start_date: date | None = None,
    end_date: date | None = None,
    today: date | None = None,
) -> list[str]:
    if RelationshipType(relationship_type) is RelationshipType.PARENT:
        return parent_child_warnings(subject, obj)
    return marriage_warnings(subject, obj, start_date, end_date, today=today)
