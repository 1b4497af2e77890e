# optbatch: batch Black-Scholes throughput kernel
# Public API

# Data model
from .core import OptionKind, OptionRecord, SeedDataError, CALL, PUT

# Pricing
from .normal import cndf
from .black_scholes import price as bs_price, price_record
from .reference import bs_price_exact

# Seed data & working set
from .dataset import load_seed, parse_seed, OptionTable, WorkingSet

# Validation
from .validation import (
    DEFAULT_TOLERANCE, exceeds_tolerance, find_mismatches, cross_validate,
)

# Batch driver
from .driver import BatchConfig, BatchDriver, BatchReport, DriverState, evaluate

__all__ = [
    # Data model
    "OptionKind", "OptionRecord", "SeedDataError", "CALL", "PUT",
    # Pricing
    "cndf", "bs_price", "price_record", "bs_price_exact",
    # Seed data
    "load_seed", "parse_seed", "OptionTable", "WorkingSet",
    # Validation
    "DEFAULT_TOLERANCE", "exceeds_tolerance", "find_mismatches", "cross_validate",
    # Driver
    "BatchConfig", "BatchDriver", "BatchReport", "DriverState", "evaluate",
]

__version__ = "0.1.0"
