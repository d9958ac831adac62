"""
Exercise catalog search, filtering and grouping.

Classification fields are open strings, so the dropdown options offered to
the user are simply the distinct values present in the catalog.
"""
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from domain.models import UNKNOWN_CLASSIFICATION, Exercise


@dataclass
class ExerciseFilters:
    """Active catalog filters. Empty strings and None mean "no filter"."""
    search_term: str = ""
    movement_type: str = ""
    pattern: str = ""
    primary_body_part: str = ""
    secondary_body_part: str = ""
    equipment: str = ""
    is_mastered: Optional[bool] = None

    @property
    def has_attribute_filters(self) -> bool:
        """True when any filter other than the text search is active."""
        return bool(
            self.movement_type
            or self.pattern
            or self.primary_body_part
            or self.secondary_body_part
            or self.equipment
            or self.is_mastered is not None
        )


@dataclass
class FilteredExercises:
    """
    Result of applying filters.

    ``search_only_matches`` lists exercises that match the text search but
    were hidden by the other filters, so the caller can explain why they
    are missing.
    """
    results: List[Exercise] = field(default_factory=list)
    search_only_matches: List[Exercise] = field(default_factory=list)


@dataclass
class FilterOptions:
    movement_types: List[str] = field(default_factory=list)
    patterns: List[str] = field(default_factory=list)
    primary_body_parts: List[str] = field(default_factory=list)
    secondary_body_parts: List[str] = field(default_factory=list)
    equipment: List[str] = field(default_factory=list)


def search_by_name(exercises: Sequence[Exercise], search_term: str) -> List[Exercise]:
    """
    Case-insensitive multi-word search on exercise names.

    Every word must appear somewhere in the name, in any order, so
    "bench barbell" matches "Bench Press Flat Barbell".
    """
    words = search_term.casefold().split()
    if not words:
        return list(exercises)
    return [e for e in exercises if all(word in e.name.casefold() for word in words)]


def _apply_attribute_filters(
    exercises: Sequence[Exercise], filters: ExerciseFilters
) -> List[Exercise]:
    filtered = list(exercises)
    if filters.movement_type:
        filtered = [e for e in filtered if e.movement_type == filters.movement_type]
    if filters.pattern:
        filtered = [e for e in filtered if e.pattern == filters.pattern]
    if filters.primary_body_part:
        filtered = [e for e in filtered if e.primary_body_part == filters.primary_body_part]
    if filters.secondary_body_part:
        filtered = [e for e in filtered if e.secondary_body_part == filters.secondary_body_part]
    if filters.equipment:
        filtered = [e for e in filtered if e.equipment == filters.equipment]
    if filters.is_mastered is not None:
        filtered = [e for e in filtered if e.is_mastered == filters.is_mastered]
    return filtered


def apply_filters(exercises: Sequence[Exercise], filters: ExerciseFilters) -> List[Exercise]:
    return _apply_attribute_filters(search_by_name(exercises, filters.search_term), filters)


def apply_filters_with_search_fallback(
    exercises: Sequence[Exercise], filters: ExerciseFilters
) -> FilteredExercises:
    """
    Apply every filter, and also report search hits the filters excluded.

    search_only_matches is only populated when there is a search term and
    at least one attribute filter.
    """
    results = apply_filters(exercises, filters)

    search_only: List[Exercise] = []
    if filters.search_term.strip() and filters.has_attribute_filters:
        allowed_ids = {e.id for e in _apply_attribute_filters(exercises, filters)}
        search_only = [
            e for e in search_by_name(exercises, filters.search_term)
            if e.id not in allowed_ids
        ]

    return FilteredExercises(results=results, search_only_matches=search_only)


def sort_by_name(exercises: Sequence[Exercise]) -> List[Exercise]:
    return sorted(exercises, key=lambda e: e.name.casefold())


def sort_by_last_used(exercises: Sequence[Exercise]) -> List[Exercise]:
    """Most recently used first; never-used exercises last, by name."""
    used = [e for e in exercises if e.last_used_date is not None]
    unused = [e for e in exercises if e.last_used_date is None]
    used = sorted(sort_by_name(used), key=lambda e: e.last_used_date, reverse=True)
    return used + sort_by_name(unused)


def group_by_body_part(exercises: Sequence[Exercise]) -> Dict[str, List[Exercise]]:
    """Group by primary body part, preserving first-seen group order."""
    groups: Dict[str, List[Exercise]] = OrderedDict()
    for exercise in exercises:
        key = exercise.primary_body_part or UNKNOWN_CLASSIFICATION
        groups.setdefault(key, []).append(exercise)
    return groups


def _distinct(values) -> List[str]:
    return sorted({v for v in values if v})


def get_filter_options(exercises: Sequence[Exercise]) -> FilterOptions:
    """Distinct, sorted, non-empty values for each classification field."""
    return FilterOptions(
        movement_types=_distinct(e.movement_type for e in exercises),
        patterns=_distinct(e.pattern for e in exercises),
        primary_body_parts=_distinct(e.primary_body_part for e in exercises),
        secondary_body_parts=_distinct(e.secondary_body_part for e in exercises),
        equipment=_distinct(e.equipment for e in exercises),
    )
