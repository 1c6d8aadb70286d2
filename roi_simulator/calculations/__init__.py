"""
Financial Calculation Engine

Core calculation modules for the retail platform ROI model.
All functions are pure: assumptions in, plain numbers out.
"""

from roi_simulator.calculations import (
    assumptions,
    store_model,
    cashflow,
    irr,
    valuation,
    scenarios,
)

__all__ = ["assumptions", "store_model", "cashflow", "irr", "valuation", "scenarios"]
