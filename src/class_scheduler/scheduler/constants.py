"""Constants for schedule generation."""

from enum import Enum


class MoveType(str, Enum):
    """Kind of neighbour move produced by the mutator."""

    RELOCATE = "relocate"
    ADD = "add"
    SHAKE = "shake"
    NONE = "none"


class ExecutionMode(str, Enum):
    """How independent annealing runs are executed."""

    SEQUENTIAL = "sequential"
    THREAD = "thread"
    PROCESS = "process"


# Default weights for the aggregate score
SCORE_WEIGHTS = {
    "total_length": 1.0,
    "grade_group_cohesion": 0.5,
    "distribution_quality": 0.3,
    "grade_progression": 0.4,
    "constraint_violations": -100.0,
    "partial_conflict_penalty": 0.0,
}

# Search window for placements (calendar days from the start date)
DEFAULT_WINDOW_DAYS = 14

# Reported end date when nothing is scheduled
DEFAULT_HORIZON_WEEKS = 6

# Probability of taking a legal slot during the greedy scan
DEFAULT_ACCEPTANCE_PROBABILITY = 0.99

# Relocation picks uniformly among this many lowest-penalty slots
RELOCATE_TOP_CANDIDATES = 3

# Add-unscheduled probability: min(ADD_MAX, ADD_BASE + (1 - completion) * ADD_SLOPE)
ADD_BASE_PROBABILITY = 0.6
ADD_SLOPE = 0.5
ADD_MAX_PROBABILITY = 0.9

# Shake removes this fraction of scheduled classes (at least SHAKE_MIN_CLASSES)
SHAKE_MIN_FRACTION = 0.02
SHAKE_MAX_FRACTION = 0.2
SHAKE_MIN_CLASSES = 2

# Multi-run aggregator
DEFAULT_WORKER_COUNT = 4
MAX_WORKER_COUNT = 8

# Per-run diversification steps (run i gets base * (1 + i * step), etc.)
TEMPERATURE_STEP = 0.2
COOLING_RATE_STEP = 0.001
MIN_TEMPERATURE_STEP = 0.1
ITERATIONS_PER_TEMP_STEP = 50
