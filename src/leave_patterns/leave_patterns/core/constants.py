"""Constants and defaults.

Note: Keep thresholds here to avoid magic numbers spread across detectors.
"""

# Day-of-week bias
DEFAULT_DAY_OF_WEEK_DEVIATION_THRESHOLD = 0.6
DEFAULT_MIN_SAMPLE_SIZE = 6
DAY_OF_WEEK_MEDIUM_DEVIATION = 0.8
DAY_OF_WEEK_HIGH_DEVIATION = 1.2
WORKING_WEEKDAYS = (0, 1, 2, 3, 4)

# Weekend / holiday bridging
DEFAULT_BRIDGING_RATIO_THRESHOLD = 0.5
DEFAULT_BRIDGING_MIN_COUNT = 3
DEFAULT_BRIDGING_WEEKDAYS = (0, 4)
BRIDGING_HIGH_RATIO = 0.8

# Short notice
DEFAULT_SHORT_NOTICE_THRESHOLD_DAYS = 1
DEFAULT_SHORT_NOTICE_COUNT_THRESHOLD = 3
DEFAULT_SHORT_NOTICE_WINDOW_DAYS = 30
DEFAULT_NOTICE_EXEMPT_LEAVE_TYPES = ("sick",)

# Frequency deviation
DEFAULT_FREQUENCY_Z_THRESHOLD = 2.0
FREQUENCY_MEDIUM_Z = 2.5
FREQUENCY_HIGH_Z = 3.0
AVERAGE_DAYS_PER_MONTH = 365.25 / 12
FREQUENCY_FULL_CONFIDENCE_MONTHS = 6

# Single-day clustering
DEFAULT_ISOLATION_RATIO_THRESHOLD = 0.7
DEFAULT_CLUSTERING_MIN_EVENTS = 5
CLUSTERING_MEDIUM_RATIO = 0.8
CLUSTERING_HIGH_RATIO = 0.9
ISOLATION_GAP_DAYS = 1

# Aggregation
DEFAULT_SEVERITY_WEIGHTS = {"LOW": 10.0, "MEDIUM": 25.0, "HIGH": 45.0}
MAX_RISK_SCORE = 100.0
DEFAULT_MEDIUM_RISK_THRESHOLD = 20.0
DEFAULT_HIGH_RISK_THRESHOLD = 50.0

# Batch
DEFAULT_MAX_WORKERS = 4
