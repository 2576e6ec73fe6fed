import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

SCORING_RULE = os.getenv("SCORING_RULE", "linear")
SUBMISSION_WINDOW_DAYS = int(os.getenv("SUBMISSION_WINDOW_DAYS", "3"))
INCREMENTAL_SUMMARY = bool(int(os.getenv("INCREMENTAL_SUMMARY", "1")))
DEFAULT_MINIMUM_MINUTES_PER_WEEK = int(os.getenv("DEFAULT_MINIMUM_MINUTES_PER_WEEK", "240"))

SEED_DEMO_DATA = bool(int(os.getenv("SEED_DEMO_DATA", "0")))

# Sessions come from the host app sharing SECRET_KEY
DEV_LOGIN = bool(int(os.getenv("DEV_LOGIN", "0")))
