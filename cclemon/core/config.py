# config.py

# Report Sentinels
# The simulation writes the winning side in its native language.
LEFT_WINNER_SENTINEL = "左"
RIGHT_WINNER_SENTINEL = "右"

# Actions, in the order they are reported and suggested
ACTION_NAMES = ("charge", "gun", "guard")

# Weight Suggestion
# Minimum usage per action before renormalization
CHARGE_WEIGHT_FLOOR = 0.2
GUN_WEIGHT_FLOOR = 0.2
GUARD_WEIGHT_FLOOR = 0.15
WEIGHT_FLOORS = {
    "charge": CHARGE_WEIGHT_FLOOR,
    "gun": GUN_WEIGHT_FLOOR,
    "guard": GUARD_WEIGHT_FLOOR,
}
WEIGHT_DECIMALS = 2

# Output
JSON_INDENT = 2
STATS_HEADER = "Aggregated stats:"
WEIGHTS_HEADER = "Suggested CPU weights (charge/gun/guard):"

# Command Line
PROGRAM_NAME = "cclemon-analyze"
EXIT_OK = 0
EXIT_USAGE = 1
EXIT_LOAD_ERROR = 2

# Logging (stderr only; stdout carries the report)
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
