import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# "linear" or "stepped"
SCORING_RULE = os.getenv("SCORING_RULE", "linear")
SUBMISSION_WINDOW_DAYS = int(os.getenv("SUBMISSION_WINDOW_DAYS", "3"))
# Apply single-session deltas to cached summaries instead of rescanning history
INCREMENTAL_SUMMARY = bool(int(os.getenv("INCREMENTAL_SUMMARY", "1")))
DEFAULT_MINIMUM_MINUTES_PER_WEEK = int(os.getenv("DEFAULT_MINIMUM_MINUTES_PER_WEEK", "240"))

# Load a demo admin/member/event on startup
SEED_DEMO_DATA = bool(int(os.getenv("SEED_DEMO_DATA", "1")))

# POST /api/v1/auth/login with {"userId"} sets the session; local use only
DEV_LOGIN = bool(int(os.getenv("DEV_LOGIN", "1")))
