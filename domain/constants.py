"""
Workout limits and defaults.

This module has no dependencies on models or services to avoid circular imports.
"""

# Structural bounds enforced by the validation engine
MAX_EXERCISES = 100
MAX_SETS_PER_EXERCISE = 50
EXERCISE_NAME_MAX_LENGTH = 100

# Numeric bounds for a single set
MAX_REPS = 1000
MAX_WEIGHT_KG = 10000

# Raw input is capped before normalization runs
SANITIZE_MAX_LENGTH = 200

# Minimum interval between two accepted save calls
SAVE_COOLDOWN_MS = 2000

# Reps used for a new set when neither a previous set nor history exists
DEFAULT_REPS = 8
