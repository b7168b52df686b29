"""
Default settings for the Loopy solver.
"""

# Logging configuration
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Deduction rules run by the step pipeline, in order
DEFAULT_STEPS = [
    "zero_hint",
    "exact_edge_count",
    "dead_end_removal",
    "two_edges_per_vertex",
    "corner_entry",
    "premature_loop",
]

DEFAULT_SOLVER = "backtracking"

# Hint value used in numpy hint matrices for faces without a hint
NO_HINT = -1
