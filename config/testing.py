SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

ANALYSIS_MAX_WORKERS = 2

# Tests vary thresholds explicitly; never read them from the environment here
LEAVE_PATTERN_CONFIG = {}
LEAVE_PATTERN_DETECTORS = None
