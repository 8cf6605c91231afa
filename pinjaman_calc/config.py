"""Centralized configuration for the loan calculator.

Default form values, rounding thresholds and display limits live here so the
engine, the CLI and the web front end agree on them.
"""

import sys

# =============================================================================
# FORM DEFAULTS
# =============================================================================

# Default loan amount (Rp 150,000,000)
DEFAULT_AMOUNT = 150_000_000

# Default nominal annual interest rate, percent
DEFAULT_RATE = 10

# Default term, expressed in DEFAULT_TERM_UNIT
DEFAULT_TERM = 5
DEFAULT_TERM_UNIT = "years"

# Schedule shown when the user has not picked one
DEFAULT_METHOD = "effective"

# =============================================================================
# BUSINESS RULES
# =============================================================================

# Longest term accepted (100 years); schedules are built month by month
MAX_TERM_MONTHS = 1200

# =============================================================================
# ROUNDING
# =============================================================================

# Nudge added before rounding so that values such as 1.005 round up
EPSILON = sys.float_info.epsilon

# Currency amounts are finalized to this many fractional digits
CURRENCY_PLACES = 2

# Balances below this are treated as fully repaid
BALANCE_EPSILON = 1e-6

# =============================================================================
# DISPLAY & EXPORT
# =============================================================================

# Schedule rows printed/rendered before truncating
MAX_PREVIEW_ROWS = 120

CURRENCY_SYMBOL = "Rp"
THOUSANDS_SEPARATOR = "."
DECIMAL_SEPARATOR = ","

# Export file name, e.g. kalkulator-pinjaman-60bln.xlsx
EXPORT_FILENAME = "kalkulator-pinjaman-{months}bln.{ext}"
