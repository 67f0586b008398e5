"""Editable catalog configuration: default price lists, colors and labels."""

from __future__ import annotations

MODULE_LABELS: dict[str, str] = {
    "pool": "Piscine",
    "snackbar": "Popcorn",
    "apparel": "Maillot",
    "wristbands": "Bracelets",
}

# Default (label, unit price) rows per revenue module, in FCFA.
DEFAULT_PRICE_LISTS: dict[str, list[tuple[str, int]]] = {
    "pool": [
        ("Piscine", 500),
        ("Forfait Piscine", 4500),
        ("Forfait Piscine 2", 4000),
        ("Visite", 200),
        ("Terrain Foot", 3000),
        ("Forfait Terrain", 25000),
        ("Événement", 50000),
        ("Anniversaire", 15000),
        ("Cours Natation", 1000),
        ("Baby-foot", 100),
    ],
    "snackbar": [
        ("Sachet", 200),
        ("Petit pot", 500),
        ("Grand pot", 1000),
        ("Barbapapa", 200),
        ("Lotus", 500),
    ],
    "apparel": [
        ("Homme", 1000),
        ("Femme", 1000),
        ("Enfant", 1000),
    ],
}

MOBILE_MONEY_PROVIDERS: tuple[str, ...] = ("orange", "wave")

MOBILE_MONEY_LABELS: dict[str, str] = {
    "orange": "Orange Money",
    "wave": "Wave Pay",
}

WRISTBAND_COLORS: tuple[str, ...] = (
    "Blanc",
    "Jaune",
    "Vert",
    "Bleu",
    "Rouge",
    "Orange",
    "Violet",
    "Gris",
    "Marron",
)

# (color, stock in, tracking in, tracking out, tracking remaining)
DEFAULT_WRISTBAND_ROWS: list[tuple[str, int, str, str, str]] = [
    ("Bleu", 100, "A001", "A020", "A021-A100"),
    ("Rouge", 50, "R10", "R15", "R16..."),
]

NEW_WRISTBAND_COLOR = "Blanc"

MONTHS_FR: tuple[str, ...] = (
    "janvier",
    "février",
    "mars",
    "avril",
    "mai",
    "juin",
    "juillet",
    "août",
    "septembre",
    "octobre",
    "novembre",
    "décembre",
)

WRISTBAND_COLOR_STYLES: dict[str, str] = {
    "Blanc": "bold #1e293b on #ffffff",
    "Jaune": "bold #422006 on #facc15",
    "Vert": "bold #ffffff on #10b981",
    "Bleu": "bold #ffffff on #3b82f6",
    "Rouge": "bold #ffffff on #ef4444",
    "Orange": "bold #ffffff on #f97316",
    "Violet": "bold #ffffff on #8b5cf6",
    "Gris": "bold #ffffff on #64748b",
    "Marron": "bold #ffffff on #92400e",
}
