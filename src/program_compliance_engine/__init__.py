"""Program compliance engine.

Compliance maturity scoring and gap analysis for academic program
compliance records, plus an institution-wide portfolio summary.
"""

__version__ = "0.1.0"
