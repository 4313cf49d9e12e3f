"""Default configuration constants for the Housing Ballot Allocator."""

# Sample building names, used in order when generating sample ballots
SAMPLE_BUILDINGS = [
    "Wolfson",
    "MGA",
    "RTB",
    "MTB",
    "85 Banbury Rd",
    "85 Woodstock Rd",
]

# Sample generation parameters (group count, household count, building count)
DEFAULT_GROUP_COUNT = 20
DEFAULT_HOUSEHOLD_COUNT = 5
DEFAULT_BUILDING_COUNT = 3
DEFAULT_SAMPLE_SEED = 42

# Sample household capacity and group size ranges (inclusive)
SAMPLE_CAPACITY_RANGE = (1, 10)
SAMPLE_GROUP_SIZE_RANGE = (1, 4)
SAMPLE_SCORE_RANGE = (0, 100)

# Share of sample groups that carry explicit preferences
SAMPLE_HOUSEHOLD_PREFERENCE_RATE = 0.4
SAMPLE_BUILDING_PREFERENCE_RATE = 0.3

# Placement tiers
TIER_HOUSEHOLD_PREFERENCE = "household_preference"
TIER_BUILDING_PREFERENCE = "building_preference"
TIER_UNPLACED = "unplaced"
PLACEMENT_TIERS = [TIER_HOUSEHOLD_PREFERENCE, TIER_BUILDING_PREFERENCE, TIER_UNPLACED]

TIER_LABELS = {
    TIER_HOUSEHOLD_PREFERENCE: "Household Preference",
    TIER_BUILDING_PREFERENCE: "Building Preference",
    TIER_UNPLACED: "Unplaced",
}

# Roster rendering: "Alice [10], Bob [20]"
ROSTER_SEPARATOR = ", "

# Separator inside preference cells of uploaded tables: "H1;;H3"
PREFERENCE_SEPARATOR = ";"

# Export column names
EXPORT_COLUMNS = ["Household name", "Building", "Size", "Occupancy", "Occupants"]

# Household utilization thresholds
HOUSEHOLD_FULL_THRESHOLD = 1.0
HOUSEHOLD_UNDERUSED_THRESHOLD = 0.5  # Below this = spare capacity

# Baseline round id used by the UI
BASELINE_ROUND_ID = "baseline"
