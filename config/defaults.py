"""Default configuration constants for the Pod Seat Planner."""

# Allocation mode: "pod_based" (department -> zone -> table) or
# "manager_proximity" (teams straight onto the full table pool)
ALLOCATION_MODE = "pod_based"
ALLOCATION_MODES = ["pod_based", "manager_proximity"]

# Seat fill order inside a table
SEQUENCING_POLICY = "serpentine"
SEQUENCING_POLICIES = ["row_major", "serpentine", "column_major"]

# Seats whose secondary coordinate snaps to the same multiple share a row
ROW_TOLERANCE = 20

# Pod clustering (center-to-center distance, floor plan units)
POD_DISTANCE_THRESHOLD = 300
POD_PADDING = 20

# Team never split across tables when True; overflow is reported unseated
STRICT_TABLE_CONSTRAINT = True

# What to do when no zone can hold a whole department
ZONE_FALLBACK = "full_pool"
ZONE_FALLBACK_OPTIONS = ["full_pool", "largest_zone", "none"]

# Preference scoring weights
POSITIONAL_PREFERENCE_WEIGHT = 10
PREMIUM_PREFERENCE_WEIGHT = 5

# Leaders are assigned under their own pseudo-team
LEADER_TEAM_PREFIX = "LEADER_"

# Seat -> table mapping: seats within this margin of a table rectangle belong to it
SEAT_TABLE_MARGIN = 50

# Sample roster (fixed department order used when no order is supplied)
DEPARTMENTS = [
    "Engineering",
    "Product",
    "Design",
    "Operations",
    "Finance",
    "Risk",
    "Marketing",
    "Data",
    "HR",
    "Legal",
]

DEPARTMENT_COLORS = {
    "Engineering": "#1976D2",
    "Product": "#7B1FA2",
    "Design": "#C2185B",
    "Operations": "#388E3C",
    "Finance": "#F57C00",
    "Risk": "#D32F2F",
    "Marketing": "#FF8F00",
    "Data": "#0288D1",
    "HR": "#5D4037",
    "Legal": "#455A64",
}
UNASSIGNED_SEAT_COLOR = "#BDBDBD"

# Sample data generation
SAMPLE_SEED = 42
SPECIAL_NEEDS_RATE = 0.05
SUB_MANAGER_RATE = 0.30

LOG_LEVEL = "INFO"
