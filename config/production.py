import os

from .config import analyzer_overrides_from_env, detectors_from_env

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

ANALYSIS_MAX_WORKERS = int(os.getenv("ANALYSIS_MAX_WORKERS", "8"))

LEAVE_PATTERN_CONFIG = analyzer_overrides_from_env()
LEAVE_PATTERN_DETECTORS = detectors_from_env()
