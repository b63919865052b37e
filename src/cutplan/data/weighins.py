"""Bundled weigh-in history used when no CSV is configured."""

from __future__ import annotations

# Dates are "M/D" relative to the plan epoch year (tracking began 9/10/2025)
DEFAULT_WEIGHINS: list[dict] = [
    {"date": "9/10", "weight": 255},
    {"date": "9/22", "weight": 245},
    {"date": "10/9", "weight": 238},
    {"date": "10/16", "weight": 235},
    {"date": "10/19", "weight": 234},
    {"date": "10/22", "weight": 233},
    {"date": "10/25", "weight": 231},
    {"date": "10/29", "weight": 229},
    {"date": "10/31", "weight": 228},
    {"date": "11/2", "weight": 227},
    {"date": "11/3", "weight": 226},
    {"date": "11/6", "weight": 226},
    {"date": "11/10", "weight": 225},
    {"date": "11/14", "weight": 223},
    {"date": "11/15", "weight": 222},
    {"date": "11/18", "weight": 220},
    {"date": "11/25", "weight": 218},
    {"date": "11/26", "weight": 217},
    {"date": "11/29", "weight": 216},
    {"date": "12/05", "weight": 214},
    {"date": "12/12", "weight": 213},
]
