"""
Company marker colours.
"""

# Fixed palette shared by every region map (Tableau 10 + extended)
COLORS = (
    "#1f77b4",  # blue
    "#ff7f0e",  # orange
    "#2ca02c",  # green
    "#d62728",  # red
    "#9467bd",  # purple
    "#8c564b",  # brown
    "#e377c2",  # pink
    "#7f7f7f",  # gray
    "#bcbd22",  # yellow-green
    "#17becf",  # cyan
    "#393b79",  # dark blue
    "#637939",  # dark green
    "#8c6d31",  # dark goldenrod
    "#843c39",  # dark red
    "#7b4173",  # dark purple
    "#3182bd",  # light blue
    "#e6550d",  # light orange
    "#31a354",  # light green
    "#756bb1",  # light purple
    "#636363",  # dark gray
)


def color_for_index(index: int) -> str:
    """Palette colour for a position, wrapping around the palette."""
    return COLORS[index % len(COLORS)]


def company_color_index(companies: list[str]) -> dict[str, int]:
    """Map each company to its position in the (sorted) company facet."""
    return {company: index for index, company in enumerate(companies)}


def company_colors(companies: list[str]) -> dict[str, str]:
    """Map each company to its marker colour."""
    return {
        company: color_for_index(index)
        for company, index in company_color_index(companies).items()
    }
