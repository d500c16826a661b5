import os

from .config import analyzer_overrides_from_env, detectors_from_env

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()

ANALYSIS_MAX_WORKERS = int(os.getenv("ANALYSIS_MAX_WORKERS", "4"))

# Analyzer threshold overrides (LEAVE_PATTERN_* variables); empty keeps defaults
LEAVE_PATTERN_CONFIG = analyzer_overrides_from_env()
LEAVE_PATTERN_DETECTORS = detectors_from_env()
