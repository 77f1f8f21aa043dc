"""Metriche finanziarie e punteggio di salute."""
from financeio.services.metrics.financial_metrics import (  # noqa: F401
    FinancialMetrics, FinancialHealth, ExpenseBreakdown,
    calculate_financial_metrics, get_financial_health, essential_ratio, is_essential,
)
