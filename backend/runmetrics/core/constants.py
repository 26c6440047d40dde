"""Shared engine constants.

Centralizes the empirical thresholds used by profiling, moving-time and
elevation analysis so we can document and override them in one place.
"""

# Distance of one statute mile in meters
MILE_M = 1609.344

# Feet per meter for elevation output
FEET_PER_METER = 3.28084

# Mean earth radius (m) for haversine
EARTH_RADIUS_M = 6371000.0

# Segment noise filter (m): at or below MIN is jitter, at or above MAX is a jump
MIN_SEGMENT_M = 0.5
MAX_SEGMENT_M = 250.0

# Fixes with a worse horizontal accuracy (m) are ignored for moving time / elevation
MAX_ACCURACY_M = 50.0

# Moving classification: speed floor (m/s) or distance floor (m) per interval
MOVING_SPEED_MPS = 0.8
MOVING_DISTANCE_M = 2.0

# Elevation smoothing window (samples) and display series cap (points)
ELEVATION_WINDOW = 5
ELEVATION_MAX_POINTS = 300

# Tolerances
BOUNDARY_TOLERANCE_M = 0.0001
BOUNDARY_TOLERANCE_MI = 0.0001
WHOLE_MILE_EPSILON = 1e-9
MANUAL_PR_TOLERANCE_MI = 0.02
ACHIEVEMENT_EPSILON = 0.001
FULL_MILE_SPLIT_MI = 0.99

# Running PR targets (miles)
PR_TARGET_MILES = {
    "mile": 1.0,
    "5k": 3.106855,
    "10k": 6.21371,
}

# Load units per mile run
RUNNING_LOAD_PER_MILE = 100.0
