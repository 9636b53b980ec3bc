"""Project finance tracker.

Records per-project budgets, ledger transactions, role rates and monthly
labor-day consumption, and derives spend, burn rate and resource usage
from them.
"""

__version__ = "1.0.0"
