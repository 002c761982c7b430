"""
Filter facet extraction.

A facet is the sorted list of distinct values of one filterable attribute
across all sites of a region. Cells may hold several values separated by
commas, semicolons or pipes; each value counts on its own.
"""

from typing import Iterable

from pipeline.normalizers.species import normalize_species, split_species
from pipeline.utils.text import MISSING_SENTINEL, split_on

_MULTI_VALUE_SEPARATORS = r"[;,|]"


def split_multi_value(value) -> list[str]:
    """Split a cell on comma/semicolon/pipe, dropping empty and "N/A" parts."""
    return [
        part for part in split_on(value, _MULTI_VALUE_SEPARATORS)
        if part != MISSING_SENTINEL
    ]


def extract_facet(values: Iterable) -> list[str]:
    """Sorted distinct values across all cells.

    >>> extract_facet(["B", "A", "A", ""])
    ['A', 'B']
    """
    distinct = set()
    for value in values:
        distinct.update(split_multi_value(value))
    return sorted(distinct)


def extract_species_facet(values: Iterable) -> list[str]:
    """Sorted distinct canonical species across all cells.

    Each cell is split into individual species and every entry is passed
    through ``normalize_species`` so synonymous spellings collapse.
    """
    distinct = set()
    for value in values:
        for part in split_species(value):
            canonical = normalize_species(part)
            if canonical:
                distinct.add(canonical)
    return sorted(distinct)
