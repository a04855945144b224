"""
Constants and shared data for cycle-related services.
"""
from datetime import datetime, timezone

from lunarium.models.phase import BlendColor, FlatColor, PhaseName

DEFAULT_CYCLE_LENGTH = 28
MIN_CYCLE_LENGTH = 21
MAX_CYCLE_LENGTH = 35
MAX_HISTORY_ENTRIES = 12

# Ovulation is counted back from the end of the cycle
LUTEAL_PHASE_DAYS = 14

# Fertile window runs from ovulation - 5 to ovulation + 1
FERTILE_DAYS_BEFORE_OVULATION = 5
FERTILE_DAYS_AFTER_OVULATION = 1

MENSTRUATION_DAYS = 5

# Flat colour of each phase, used as blend endpoints
FOLLICULAR_COLOR = "#DDE9EF"
FERTILITY_COLOR = "#fdfb93"
OVULATION_PEAK_COLOR = "#f9f505"
LUTEAL_COLOR = "#CF90C1"
PMS_COLOR = "#93417A"
MENSTRUATION_START_COLOR = "#882c45"

PHASE_SHORT_NAMES = {
    PhaseName.MENSTRUATION: "Lune rouge",
    PhaseName.FOLLICULAR: "Jeune Fille",
    PhaseName.OVULATION: "Mère",
    PhaseName.LUTEAL: "Enchanteresse",
    PhaseName.PMS: "SPM",
}

TRANSITION_SHORT_NAME = "Transition"

PHASE_DESCRIPTIONS = {
    PhaseName.MENSTRUATION: "Repos, introspection, détoxification",
    PhaseName.FOLLICULAR: "Créativité, nouveaux projets, brainstorming",
    PhaseName.OVULATION: "Communication, collaboration, être présente",
    PhaseName.LUTEAL: "Intuition, focus, nettoyage",
    PhaseName.PMS: "Détails, finition, laisser passer la vague",
}

# (color, border, text) for menstruation days 1 to 5, dark to light
MENSTRUATION_PALETTE = (
    (FlatColor(hex=MENSTRUATION_START_COLOR), "#6b2336", "#fff"),
    (FlatColor(hex="#b3495a"), "#882c45", "#fff"),
    (FlatColor(hex="#df6268"), "#b3495a", "#7f1d1d"),
    (FlatColor(hex="#fa8a8e"), "#df6268", "#7f1d1d"),
    (FlatColor(hex="#f4abb4"), "#fa8a8e", "#7f1d1d"),
)

# (color, border, text) for the fertile window, from ovulation - 5 to ovulation + 1
FERTILE_WINDOW_PALETTE = (
    (BlendColor(start=FOLLICULAR_COLOR, end=FERTILITY_COLOR), "#AACBE0", "#164e63"),
    (FlatColor(hex=FERTILITY_COLOR), "#f4f087", "#854d0e"),
    (FlatColor(hex=FERTILITY_COLOR), "#f4f087", "#854d0e"),
    (FlatColor(hex=FERTILITY_COLOR), "#f4f087", "#854d0e"),
    (FlatColor(hex=FERTILITY_COLOR), "#f4f087", "#854d0e"),
    (FlatColor(hex=OVULATION_PEAK_COLOR), "#e8e404", "#713f12"),
    (BlendColor(start=FERTILITY_COLOR, end=LUTEAL_COLOR), "#CF90C1", "#78350f"),
)

FOLLICULAR_STYLE = (FlatColor(hex=FOLLICULAR_COLOR), "#AACBE0", "#164e63")
LUTEAL_STYLE = (FlatColor(hex=LUTEAL_COLOR), "#a855f7", "#701a75")
LUTEAL_TRANSITION_STYLE = (BlendColor(start=LUTEAL_COLOR, end=PMS_COLOR), "#a855f7", "#701a75")
PMS_STYLE = (FlatColor(hex=PMS_COLOR), "#6d2f5a", "#fff")
PMS_TRANSITION_STYLE = (BlendColor(start=PMS_COLOR, end=MENSTRUATION_START_COLOR), "#6d2f5a", "#fff")

# Moon phase reference
KNOWN_NEW_MOON = datetime(2025, 10, 21, 13, 25, tzinfo=timezone.utc)
LUNAR_CYCLE_DAYS = 29.53058867

MOON_EMOJIS = ("🌑", "🌒", "🌓", "🌔", "🌕", "🌖", "🌗", "🌘")
MOON_NAMES = (
    "Nouvelle lune",
    "Premier croissant",
    "Premier quartier",
    "Gibbeuse croissante",
    "Pleine lune",
    "Gibbeuse décroissante",
    "Dernier quartier",
    "Dernier croissant",
)

# Activity defaults
DEFAULT_ACTIVITY_COLOR = "#3b82f6"
UNTITLED_ACTIVITY = "Sans titre"

# Google Calendar colour ids
GOOGLE_COLORS = {
    "1": "#a4bdfc",   # Lavender
    "2": "#7ae7bf",   # Sage
    "3": "#dbadff",   # Grape
    "4": "#ff887c",   # Flamingo
    "5": "#fbd75b",   # Banana
    "6": "#ffb878",   # Tangerine
    "7": "#46d6db",   # Peacock
    "8": "#e1e1e1",   # Graphite
    "9": "#5484ed",   # Blueberry
    "10": "#51b749",  # Basil
    "11": "#dc2127",  # Tomato
}
