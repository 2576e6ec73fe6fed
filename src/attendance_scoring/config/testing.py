SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

SCORING_RULE = "linear"
SUBMISSION_WINDOW_DAYS = 3
INCREMENTAL_SUMMARY = True
DEFAULT_MINIMUM_MINUTES_PER_WEEK = 240

SEED_DEMO_DATA = False

DEV_LOGIN = True
