"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_LOW_STOCK_THRESHOLD = 10
DEFAULT_MONTH_OPTIONS = 12
DEFAULT_CURRENCY_SYMBOL = "₵"
MIN_PASSWORD_LENGTH = 6
