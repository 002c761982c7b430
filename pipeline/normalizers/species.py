"""
Species name normalization utilities.

Regional exports spell the same species many ways: scientific names,
regional spellings, inconsistent casing and numbered list prefixes such as
"4: Atlantic Salmon". ``normalize_species`` folds them into one display name.
"""

import re
import unicodedata

from pipeline.utils.text import MISSING_SENTINEL, clean_value, split_on, title_case

# Numbered list prefixes: "4: Atlantic Salmon", "1 American Oyster"
_NUMERIC_PREFIX = re.compile(r"^\d+\s*(?::\s*|\s+)")

# Exact (lower-cased) spellings and scientific names -> canonical common name
SPECIES_SYNONYMS = {
    # Salmonids
    "atlantic salmon": "Atlantic Salmon",
    "salmo salar": "Atlantic Salmon",
    "saumon atlantique": "Atlantic Salmon",
    "coho salmon": "Coho Salmon",
    "coho": "Coho Salmon",
    "oncorhynchus kisutch": "Coho Salmon",
    "chinook salmon": "Chinook Salmon",
    "chinook": "Chinook Salmon",
    "oncorhynchus tshawytscha": "Chinook Salmon",
    "sockeye salmon": "Sockeye Salmon",
    "oncorhynchus nerka": "Sockeye Salmon",
    "pink salmon": "Pink Salmon",
    "oncorhynchus gorbuscha": "Pink Salmon",
    "chum salmon": "Chum Salmon",
    "oncorhynchus keta": "Chum Salmon",
    "rainbow trout": "Rainbow Trout",
    "steelhead": "Rainbow Trout",
    "steelhead trout": "Rainbow Trout",
    "oncorhynchus mykiss": "Rainbow Trout",
    "brown trout": "Brown Trout",
    "sea trout": "Brown Trout",
    "salmo trutta": "Brown Trout",
    "brook trout": "Brook Trout",
    "speckled trout": "Brook Trout",
    "salvelinus fontinalis": "Brook Trout",
    "arctic char": "Arctic Char",
    "arctic charr": "Arctic Char",
    "other char": "Other Char",
    "salvelinus alpinus": "Arctic Char",
    # Marine finfish
    "atlantic cod": "Atlantic Cod",
    "gadus morhua": "Atlantic Cod",
    "atlantic halibut": "Atlantic Halibut",
    "hippoglossus hippoglossus": "Atlantic Halibut",
    "sablefish": "Sablefish",
    "black cod": "Sablefish",
    "anoplopoma fimbria": "Sablefish",
    "turbot": "Turbot",
    "scophthalmus maximus": "Turbot",
    "lumpfish": "Lumpfish",
    "lumpsucker": "Lumpfish",
    "cyclopterus lumpus": "Lumpfish",
    "ballan wrasse": "Ballan Wrasse",
    "labrus bergylta": "Ballan Wrasse",
    "atlantic sturgeon": "Atlantic Sturgeon",
    "acipenser oxyrinchus": "Atlantic Sturgeon",
    "tilapia": "Tilapia",
    "oreochromis niloticus": "Tilapia",
    # Shellfish
    "blue mussel": "Blue Mussel",
    "common mussel": "Blue Mussel",
    "mytilus edulis": "Blue Mussel",
    "mussels": "Mussel",
    "pacific oyster": "Pacific Oyster",
    "crassostrea gigas": "Pacific Oyster",
    "magallana gigas": "Pacific Oyster",
    "american oyster": "American Oyster",
    "eastern oyster": "American Oyster",
    "crassostrea virginica": "American Oyster",
    "european flat oyster": "European Flat Oyster",
    "native oyster": "European Flat Oyster",
    "flat oyster": "European Flat Oyster",
    "ostrea edulis": "European Flat Oyster",
    "oysters": "Oyster",
    "giant scallop": "Sea Scallop",
    "sea scallop": "Sea Scallop",
    "placopecten magellanicus": "Sea Scallop",
    "king scallop": "King Scallop",
    "pecten maximus": "King Scallop",
    "queen scallop": "Queen Scallop",
    "aequipecten opercularis": "Queen Scallop",
    "scallops": "Scallop",
    "manila clam": "Manila Clam",
    "venerupis philippinarum": "Manila Clam",
    "ruditapes philippinarum": "Manila Clam",
    "littleneck clam": "Littleneck Clam",
    "soft shell clam": "Softshell Clam",
    "soft-shell clam": "Softshell Clam",
    "softshell clam": "Softshell Clam",
    "common softshell clam": "Softshell Clam",
    "mya arenaria": "Softshell Clam",
    "quahog": "Quahog",
    "mercenaria mercenaria": "Quahog",
    "geoduck": "Geoduck",
    "panopea generosa": "Geoduck",
    "clams": "Clam",
    "american lobster": "American Lobster",
    "homarus americanus": "American Lobster",
    "european lobster": "European Lobster",
    "homarus gammarus": "European Lobster",
    "abalone": "Abalone",
    "haliotis": "Abalone",
    # Echinoderms
    "green sea urchin": "Green Sea Urchin",
    "strongylocentrotus droebachiensis": "Green Sea Urchin",
    "sea urchin": "Sea Urchin",
    "sea cucumber": "Sea Cucumber",
    "cucumaria frondosa": "Sea Cucumber",
    # Seaweeds
    "sugar kelp": "Sugar Kelp",
    "saccharina latissima": "Sugar Kelp",
    "laminaria saccharina": "Sugar Kelp",
    "oarweed": "Oarweed",
    "laminaria digitata": "Oarweed",
    "dulse": "Dulse",
    "palmaria palmata": "Dulse",
    "winged kelp": "Winged Kelp",
    "alaria esculenta": "Winged Kelp",
    "seaweed": "Seaweed",
    "seaweeds": "Seaweed",
    "macroalgae": "Seaweed",
}

# Ordered fallback rules: every fragment must match (regex search on the
# lower-cased name). First matching rule wins.
SPECIES_FALLBACK_RULES = [
    (("atlantic", "salmon"), "Atlantic Salmon"),
    (("salar",), "Atlantic Salmon"),
    (("coho",), "Coho Salmon"),
    (("chinook",), "Chinook Salmon"),
    (("sockeye",), "Sockeye Salmon"),
    (("rainbow", "trout"), "Rainbow Trout"),
    (("steelhead",), "Rainbow Trout"),
    (("mykiss",), "Rainbow Trout"),
    (("brown", "trout"), "Brown Trout"),
    (("brook", "trout"), "Brook Trout"),
    ((r"\bcharr?\b",), "Arctic Char"),
    (("salvelinus",), "Arctic Char"),
    ((r"\bcod\b",), "Atlantic Cod"),
    (("halibut",), "Atlantic Halibut"),
    (("sablefish",), "Sablefish"),
    (("lumpfish",), "Lumpfish"),
    (("wrasse",), "Wrasse"),
    (("sturgeon",), "Sturgeon"),
    (("mytilus",), "Blue Mussel"),
    (("mussel",), "Mussel"),
    (("pacific", "oyster"), "Pacific Oyster"),
    (("crassostrea",), "Oyster"),
    (("oyster",), "Oyster"),
    (("scallop",), "Scallop"),
    (("pecten",), "Scallop"),
    (("quahog",), "Quahog"),
    (("geoduck",), "Geoduck"),
    (("clam",), "Clam"),
    (("cockle",), "Cockle"),
    (("lobster",), "Lobster"),
    (("urchin",), "Sea Urchin"),
    (("cucumber",), "Sea Cucumber"),
    (("kelp",), "Kelp"),
    (("laminaria",), "Kelp"),
    (("seaweed",), "Seaweed"),
    ((r"\balgae\b",), "Seaweed"),
]

# Norwegian register names -> English
NORWEGIAN_SPECIES = {
    # Salmonids
    "Laks": "Salmon",
    "Regnbueørret": "Rainbow Trout",
    "Ørret": "Trout",
    "Røye": "Arctic Char",
    "Annen røye": "Other Char",
    # Flatfish
    "Kveite": "Halibut",
    "Piggvar": "Turbot",
    "Rødspette": "Plaice",
    "Tunge": "Sole",
    "Gapeflyndre": "Lemon Sole",
    "Blåkveite": "Greenland Halibut",
    # Cod family
    "Torsk": "Cod",
    "Sei": "Saithe",
    "Lange": "Ling",
    "Lyr": "Pollock",
    "Lysing": "Hake",
    "Brosme": "Tusk",
    "Hyse": "Haddock",
    "Polartorsk": "Polar Cod",
    # Wolffish
    "Flekksteinbit": "Spotted Wolffish",
    "Gråsteinbit": "Atlantic Wolffish",
    # Cleaner fish
    "Rognkjeks": "Lumpfish",
    "Berggylt": "Ballan Wrasse",
    "Bergnebb": "Goldsinny Wrasse",
    "Grønngylt": "Corkwing Wrasse",
    "Gressgylt": "Cuckoo Wrasse",
    "Brungylt": "Bronze Wrasse",
    "Blåstål": "Blue Streak Wrasse",
    "Rødnebb": "Red Wrasse",
    # Shellfish
    "Blåskjell": "Blue Mussel",
    "Østers": "Oyster",
    "Flatøsters": "European Flat Oyster",
    "Stillehavsøsters": "Pacific Oyster",
    "Hummer": "Lobster",
    "Taskekrabbe": "Edible Crab",
    "Kongekrabbe": "King Crab",
    "Kamskjell": "Scallop",
    "Sjøkreps": "Norway Lobster",
    "Reke": "Shrimp",
    "Knivskjell": "Razor Shell",
    "O-skjell": "Horse Mussel",
    "Haneskjell": "Queen Scallop",
    "Hjerteskjell": "Cockle",
    # Echinoderms and other invertebrates
    "Drøbaksjøpiggsvin": "Green Sea Urchin",
    "Sjøpiggsvin uspes.": "Sea Urchin (unspecified)",
    "Rødpølse": "Red Sea Cucumber",
    "Sekkdyr": "Sea Squirt",
    "Sekkdyr uspes.": "Sea Squirt (unspecified)",
    # Seaweed
    "Sukkertare": "Sugar Kelp",
    "Fingertare": "Oarweed",
    "Butare": "Winged Kelp",
    "Stortare": "Tangle",
    "Søl": "Dulse",
    "Havsalat": "Sea Lettuce",
    "Sauetang": "Channelled Wrack",
    "Grisetang": "Knotted Wrack",
    "Blæretang": "Bladder Wrack",
    "Martaum": "Sea Lace",
    # Other
    "Makrell": "Mackerel",
    "Havabbor": "European Seabass",
    "Ål": "Eel",
    "Breiflabb": "Monkfish",
}

# Quebec (French) names -> English
FRENCH_SPECIES = {
    "Moule bleue": "Blue Mussel",
    "Huître américaine": "American Oyster",
    "Laminaire à long stipe": "Sugar Kelp",
    "Laminaire sucrée": "Sugar Kelp",
    "Pétoncle géant": "Giant Scallop",
    "Pétoncle giant": "Giant Scallop",
    "Pétoncle d'Islande": "Iceland Scallop",
    "Mye commune": "Common Softshell Clam",
    "Oursin vert": "Green Sea Urchin",
    "Macroalgues": "Macroalgae",
    "Algue brune": "Brown Algae",
    "Homard américain": "American Lobster",
}

# Chilean register names (upper-cased Spanish) -> English
CHILE_SPECIES = {
    "SALMON ATLANTICO": "Atlantic Salmon",
    "SALMON DEL ATLANTICO": "Atlantic Salmon",
    "SALAR": "Atlantic Salmon",
    "SALMON COHO": "Coho Salmon",
    "COHO": "Coho Salmon",
    "SALMON CHINOOK": "Chinook Salmon",
    "CHINOOK": "Chinook Salmon",
    "SALMON ROSA": "Pink Salmon",
    "SALMON KETA": "Chum Salmon",
    "TRUCHA ARCOIRIS": "Rainbow Trout",
    "TRUCHA": "Trout",
    "RODABALLO": "Turbot",
    "CAMARON": "Shrimp",
    "OSTION": "Scallop",
    "OSTRA": "Oyster",
    "MEJILLON": "Mussel",
    "CHORITO": "Mussel",
    "CHORO": "Mussel",
    "CHOLGA": "Ribbed Mussel",
    "ALGA": "Seaweed",
    "ALGAS": "Seaweed",
    "HUIRO": "Kelp",
    "COCHAYUYO": "Cochayuyo",
    "LUGA NEGRA": "Black Luga",
    "LUGA ROJA": "Red Luga",
    "LUGA": "Luga",
    "LUCHE": "Luche",
    "CHASCON": "Chascon",
    "PELILLO": "Pelillo",
    "CRESPA": "Crispa",
    "OREJA DE MAR": "Abalone",
    "ABALON": "Abalone",
    "LOCO": "Locos",
    "PICOROCO": "Picoroco",
    "ERIZO": "Sea Urchin",
    "CONGRIO": "Conger",
    "BACALAO": "Cod",
    "MERLUZA": "Hake",
    "JUREL": "Jack Mackerel",
    "CABALLA": "Mackerel",
    "ANCHOVETA": "Anchoveta",
    "SARDINA": "Sardine",
    "ATUN": "Tuna",
}

# Broad species groups, keyed on whole words of canonical names (an
# optional plural "s" is allowed)
SPECIES_TYPE_KEYWORDS = [
    ("Seaweed", ("kelp", "seaweed", "wrack", "dulse", "oarweed", "algae", "sea lettuce", "tangle")),
    ("Shellfish", (
        "mussel", "oyster", "scallop", "clam", "quahog", "geoduck", "cockle",
        "lobster", "abalone", "shrimp", "crab", "shell",
    )),
    ("Echinoderm", ("urchin", "cucumber", "sea star")),
    ("Finfish", (
        "salmon", "trout", "char", "cod", "halibut", "sablefish", "turbot",
        "lumpfish", "wrasse", "sturgeon", "tilapia", "haddock", "bass", "seabass",
        "saithe", "plaice", "sole", "eel", "mackerel", "hake", "ling", "tusk",
        "pollock", "wolffish", "monkfish", "conger", "sardine", "tuna",
    )),
]

_SPECIES_TYPE_PATTERNS = [
    (group, re.compile(r"\b(?:" + "|".join(map(re.escape, keywords)) + r")s?\b"))
    for group, keywords in SPECIES_TYPE_KEYWORDS
]

_SPECIES_SEPARATORS = r"[,;&|]"
_TRANSLATION_SEPARATORS = r"[;,|]"


def strip_numeric_prefix(name: str) -> str:
    """Remove a leading list number such as "4: " or "1 "."""
    return _NUMERIC_PREFIX.sub("", clean_value(name), count=1).strip()


def normalize_species(name) -> str:
    """Normalize a species name to its canonical display form.

    Args:
        name: Raw species string from source data

    Returns:
        Canonical species name; "" for blank input
    """
    cleaned = strip_numeric_prefix(name)
    if not cleaned:
        return ""

    lowered = re.sub(r"\s+", " ", cleaned.lower())

    if lowered in SPECIES_SYNONYMS:
        return SPECIES_SYNONYMS[lowered]

    for fragments, canonical in SPECIES_FALLBACK_RULES:
        if all(re.search(fragment, lowered) for fragment in fragments):
            return canonical

    return title_case(cleaned)


def split_species(value) -> list[str]:
    """Split a multi-species cell into individual entries.

    e.g., "Char, Salmon" -> ["Char", "Salmon"]
    """
    return [
        part for part in split_on(value, _SPECIES_SEPARATORS)
        if part != MISSING_SENTINEL and part.lower() != "unknown"
    ]


def normalize_species_list(value) -> list[str]:
    """Split and normalize a species cell, keeping first-seen order."""
    seen = []
    for part in split_species(value):
        canonical = normalize_species(part)
        if canonical and canonical not in seen:
            seen.append(canonical)
    return seen


def classify_species(name) -> str:
    """Broad group ("Finfish", "Shellfish", ...) for a species; "" if unknown."""
    lowered = normalize_species(name).lower()
    if not lowered:
        return ""
    for group, pattern in _SPECIES_TYPE_PATTERNS:
        if pattern.search(lowered):
            return group
    return ""


def site_produces_species(species_value, target: str) -> bool:
    """Check whether a site's species cell lists ``target`` (case-insensitive)."""
    target = clean_value(target).lower()
    if not target:
        return False
    return any(s.lower() == target for s in split_species(species_value))


def translate_species(name, table: dict[str, str]) -> str:
    """Translate a single species name using a lookup table."""
    text = clean_value(name)
    if not text:
        return ""
    if text in table:
        return table[text]
    # Case-insensitive second chance
    lowered = text.lower()
    for source, english in table.items():
        if source.lower() == lowered:
            return english
    return text


def translate_species_string(value, table: dict[str, str]) -> str:
    """Translate a comma/semicolon/pipe separated species cell.

    Entries are translated independently and rejoined with ", ".
    """
    parts = split_on(value, _TRANSLATION_SEPARATORS)
    return ", ".join(translate_species(part, table) for part in parts)


def translate_species_contains(name, table: dict[str, str]) -> str:
    """Translate a species name that may carry extra words.

    Exact (case-insensitive) entries win; otherwise the longest table key
    found as whole words inside the name is used, so "SALMON COHO (SMOLT)"
    gives "Coho Salmon" and "LUGA NEGRA" beats "LUGA". Unmatched names
    pass through unchanged.
    """
    text = clean_value(name)
    if not text:
        return ""
    exact = translate_species(text, table)
    if exact != text:
        return exact

    folded = _strip_accents(text).upper()
    for source in sorted(table, key=len, reverse=True):
        if re.search(rf"\b{re.escape(_strip_accents(source).upper())}\b", folded):
            return table[source]
    return text


def _strip_accents(text: str) -> str:
    return "".join(
        char for char in unicodedata.normalize("NFKD", text)
        if not unicodedata.combining(char)
    )
