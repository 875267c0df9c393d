"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TIMEZONE = "Asia/Ho_Chi_Minh"

DAILY_FEE_KEY = "daily_fee"
DAILY_FEE_DESCRIPTION = "Học phí hàng ngày (VND)"
DEFAULT_DAILY_FEE = 70000
MAX_DAILY_FEE = 1_000_000

APP_NAME_KEY = "app_name"

MIN_STUDENT_NAME_LENGTH = 2

CIVIL_DAY_FORMAT = "%Y-%m-%d"
CIVIL_MONTH_FORMAT = "%Y-%m"
