"""
Retail platform ROI model: store economics, cash-flow projection and valuation.
"""

__version__ = "0.1.0"
