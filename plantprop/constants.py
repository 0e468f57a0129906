"""
Shared constants used across the application.

This module contains constants that need to be consistent across
different parts of the application (forms, templates, validation, etc.).
"""

# USDA hardiness zones offered in the propagation form and results header
USDA_ZONES = [
    ("1a", "Zone 1a (-60°F to -55°F)"),
    ("1b", "Zone 1b (-55°F to -50°F)"),
    ("2a", "Zone 2a (-50°F to -45°F)"),
    ("2b", "Zone 2b (-45°F to -40°F)"),
    ("3a", "Zone 3a (-40°F to -35°F)"),
    ("3b", "Zone 3b (-35°F to -30°F)"),
    ("4a", "Zone 4a (-30°F to -25°F)"),
    ("4b", "Zone 4b (-25°F to -20°F)"),
    ("5a", "Zone 5a (-20°F to -15°F)"),
    ("5b", "Zone 5b (-15°F to -10°F)"),
    ("6a", "Zone 6a (-10°F to -5°F)"),
    ("6b", "Zone 6b (-5°F to 0°F)"),
    ("7a", "Zone 7a (0°F to 5°F)"),
    ("7b", "Zone 7b (5°F to 10°F)"),
    ("8a", "Zone 8a (10°F to 15°F)"),
    ("8b", "Zone 8b (15°F to 20°F)"),
    ("9a", "Zone 9a (20°F to 25°F)"),
    ("9b", "Zone 9b (25°F to 30°F)"),
    ("10a", "Zone 10a (30°F to 35°F)"),
    ("10b", "Zone 10b (35°F to 40°F)"),
    ("11a", "Zone 11a (40°F to 45°F)"),
    ("11b", "Zone 11b (45°F to 50°F)"),
    ("12a", "Zone 12a (50°F to 55°F)"),
    ("12b", "Zone 12b (55°F to 60°F)"),
    ("13a", "Zone 13a (60°F to 65°F)"),
    ("13b", "Zone 13b (65°F to 70°F)"),
]

# Zone used for climate info when the requested zone has no reference entry
DEFAULT_ZONE = "7a"

# Plant maturity options (value, label shown in the form)
MATURITY_LEVELS = [
    ("seedling", "Sprout (0-6 months)"),
    ("young", "Young (6 months - 2 years)"),
    ("mature", "Mature (2-5 years)"),
    ("established", "Established (5+ years)"),
]

# Growing environment options
ENVIRONMENTS = [
    ("inside", "Inside"),
    ("outside", "Outside"),
    ("greenhouse", "Greenhouse"),
]

# Accepted spellings for environment values, mapped to the canonical value
ENVIRONMENT_SYNONYMS = {
    "inside": "inside",
    "indoor": "inside",
    "indoors": "inside",
    "outside": "outside",
    "outdoor": "outside",
    "outdoors": "outside",
    "garden": "outside",
    "greenhouse": "greenhouse",
    "glasshouse": "greenhouse",
}

DIFFICULTY_LEVELS = ("easy", "medium", "hard")

# Preferred-method hints from the results page, mapped to plant method names
METHOD_HINTS = {
    "cutting": "stem-cutting",
    "division": "division",
    "layering": "air-layering",
}

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]
