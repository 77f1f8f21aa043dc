"""Generazione dei report finanziari (motore locale e remoto)."""
from financeio.services.reports.report_data import FinancialData, TopExpense, build_financial_data  # noqa: F401
from financeio.services.reports.local_report import (  # noqa: F401
    generate_local_report, generate_recommendations, generate_monthly_tip,
    build_report_prompt, extract_financial_data, generate_report_from_prompt,
)
