# jobshop/core/config.py

import os

DB_URL = os.environ.get("JOBSHOP_DB_URL", "sqlite:///db.sqlite")  # file in project root

# "Today" for payments and expenses is resolved in the shop's timezone
TIMEZONE = os.environ.get("JOBSHOP_TIMEZONE", "Asia/Kolkata")

CURRENCY = os.environ.get("JOBSHOP_CURRENCY", "INR")

LOG_LEVEL = os.environ.get("JOBSHOP_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
