"""Default rates, lending thresholds and validation messages."""

MONTHS_PER_YEAR = 12

# Annual upkeep as a fraction of purchase price.
DEFAULT_MAINTENANCE_RATE = 0.01

# Inclusive DTI limits in percent. FE is housing only, BE includes other debts.
AFFORDABILITY_LIMITS = {
    "Conventional": {"BE": 50.0},
    "FHA": {"FE": 31.0, "BE": 43.0},
    "Ideal": {"BE": 36.0},
}

# PMI is expected once the loan exceeds this share of the price.
PMI_LTV_THRESHOLD = 80.0

PRINCIPAL_NEGATIVE = "Principal must be non-negative"
RATE_NEGATIVE = "Interest rate must be non-negative"
TERM_NOT_POSITIVE = "Loan term must be positive"
INCOME_NOT_POSITIVE = "Gross monthly income must be positive"
PRICE_NEGATIVE = "Purchase price must be non-negative"
PRICE_MISSING = "Purchase price must be positive when a loan is present"
