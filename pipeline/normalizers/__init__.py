"""
Data normalization utilities.

These modules convert region-specific cell values (coordinates, species,
tooltips, facets, colours) into the normalised site schema.
"""

from .colors import color_for_index, company_color_index, company_colors
from .coordinates import (
    coerce_coordinate,
    coerce_latlon,
    coerce_metres,
    dms_pair_to_latlon,
    dms_to_latlon,
    make_bng_transformer,
    osgrid_to_latlon,
    parse_dms,
    web_mercator_to_latlon,
)
from .facets import extract_facet, extract_species_facet, split_multi_value
from .hover import build_hover_text
from .species import (
    classify_species,
    normalize_species,
    normalize_species_list,
    site_produces_species,
    split_species,
    translate_species,
    translate_species_string,
)

__all__ = [
    'coerce_coordinate',
    'coerce_latlon',
    'coerce_metres',
    'osgrid_to_latlon',
    'make_bng_transformer',
    'web_mercator_to_latlon',
    'parse_dms',
    'dms_to_latlon',
    'dms_pair_to_latlon',
    'classify_species',
    'normalize_species',
    'normalize_species_list',
    'split_species',
    'site_produces_species',
    'translate_species',
    'translate_species_string',
    'build_hover_text',
    'split_multi_value',
    'extract_facet',
    'extract_species_facet',
    'color_for_index',
    'company_color_index',
    'company_colors',
]
