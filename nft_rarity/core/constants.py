# ==============================================================================
# TRAIT TYPES
# ==============================================================================
TRAIT_BACKGROUND_COLOR = "Background Color"
TRAIT_SHAPE = "Shape"
TRAIT_WORDS = "Words"

TRAIT_TYPES = (TRAIT_BACKGROUND_COLOR, TRAIT_SHAPE, TRAIT_WORDS)

# ==============================================================================
# PRIOR DISTRIBUTIONS (from contract design)
# ==============================================================================
# Shape probabilities from the contract's cumulative table
SHAPE_PRIORS = {
    "Circle":   0.256,
    "Square":   0.192,
    "Triangle": 0.144,
    "Diamond":  0.108,
    "Star":     0.081,
    "Pentagon": 0.061,
    "Hexagon":  0.046,
    "Octagon":  0.034,
    "Cross":    0.026,
    "Heart":    0.019,
    "Arrow":    0.014,
    "Spiral":   0.011,
    "Infinity": 0.008,
}

BACKGROUND_COLOR_PRIOR = 1 / 13          # Uniform across 13 colours
WORD_COMBINATION_PRIOR = 1 / 1_000_000   # 100^3 three-word combinations
FALLBACK_PRIOR = 0.001                   # Unknown trait types / values

# Background colours the contract can mint (13)
BACKGROUND_COLORS = {
    "#FF0080": "NEON_PINK",
    "#0080FF": "ELECTRIC_BLUE",
    "#8000FF": "CYBER_PURPLE",
    "#00FF80": "LASER_GREEN",
    "#FF8000": "SUNSET_ORANGE",
    "#FFFF00": "ACID_YELLOW",
    "#FF0040": "HOT_MAGENTA",
    "#00FFFF": "PLASMA_CYAN",
    "#FF4000": "RETRO_RED",
    "#80FF00": "VOLT_LIME",
    "#4000FF": "NEON_VIOLET",
    "#C0C0C0": "CHROME_SILVER",
    "#FFBF00": "GOLDEN_AMBER",
}

# ==============================================================================
# SMOOTHING
# ==============================================================================
# (minted count upper bound, alpha); last entry applies above all bounds
SMOOTHING_STEPS = [
    (1000, 200),
    (5000, 100),
]
SMOOTHING_FLOOR = 50

# ==============================================================================
# NORMALIZATION & TIERS
# ==============================================================================
DEGENERATE_SCORE = 50.0        # All ICs tied (or empty range)
SINGLETON_PERCENTILE = 50      # Batch of exactly one token

# Collection mode: percentile thresholds, checked top-down
COLLECTION_TIERS = [
    (98, "S"),
    (90, "A"),
    (60, "B"),
    (30, "C"),
]

# Single-token mode: score thresholds, checked top-down
SINGLE_TOKEN_TIERS = [
    (80, "S"),
    (65, "A"),
    (45, "B"),
    (25, "C"),
]

BOTTOM_TIER = "D"
SINGLE_TOKEN_IC_SCALE = 10.0   # score = IC * 10, clamped to [0, 100]

MODE_COLLECTION = "collection"
MODE_SINGLE_TOKEN = "single_token"

# ==============================================================================
# DISPLAY DEFAULTS (shown for unparseable fields, never counted)
# ==============================================================================
DEFAULT_BACKGROUND_COLOR = "#FF0080"
DEFAULT_SHAPE = "Circle"
DEFAULT_WORDS = "DEMO NEON WAVE"
DISPLAY_DEFAULTS = {
    TRAIT_BACKGROUND_COLOR: DEFAULT_BACKGROUND_COLOR,
    TRAIT_SHAPE: DEFAULT_SHAPE,
    TRAIT_WORDS: DEFAULT_WORDS,
}
TOKEN_NAME_PREFIX = "Retro NFT #"
