"""
Constants for taxonomies app.

Default dropdown options for pressure equipment registration.
"""

DEFAULT_DROPDOWN_OPTIONS: dict[str, list[str]] = {
    "types": [
        "Pressure Vessel",
        "Heat Exchanger",
        "Storage Tank (API 650)",
        "Storage Tank (API 620)",
        "Piping Circuit",
        "Boiler",
        "Heater",
        "Reactor",
        "Column/Tower",
        "Separator",
        "Sphere",
    ],
    "functions": [
        "Storage",
        "Separation",
        "Heat Transfer",
        "Reaction",
        "Mixing",
        "Filtering",
        "Pressure Relief",
    ],
    "geometries": [
        "Cylindrical (Horizontal)",
        "Cylindrical (Vertical)",
        "Spherical",
        "Conical",
        "Rectangular/Box",
    ],
    "constructions": [
        "Welded",
        "Riveted",
        "Forged",
        "Multi-layer",
        "Brazed",
    ],
    "services": [
        "General Hydrocarbon",
        "Sour Service (H2S)",
        "Corrosive",
        "Steam",
        "Water",
        "Air/Nitrogen",
        "Lethal Service",
        "Cryogenic",
    ],
    "orientations": [
        "Horizontal",
        "Vertical",
        "Sloped",
    ],
    "statuses": [
        "Active",
        "In Service",
        "Out of Service",
        "Under Maintenance",
        "Construction/Fabrication",
        "Scrapped/Decommissioned",
        "Spare",
    ],
}

CATEGORIES = tuple(DEFAULT_DROPDOWN_OPTIONS)
