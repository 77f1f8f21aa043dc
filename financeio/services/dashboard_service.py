"""
Servizio per i dati della dashboard (riepiloghi e serie per i grafici)
"""
from financeio.defaults import INCOME, EXPENSE
from financeio.services.metrics import calculate_financial_metrics, get_financial_health
from financeio.services.transactions.transactions_service import TransactionService, calculate_summary
from financeio.utils import get_field, to_date


def expenses_by_category(transactions):
    """Serie per il grafico a torta: [{category, value}] nell'ordine di prima comparsa"""
    series = []
    index = {}
    for t in transactions:
        if get_field(t, 'type') != EXPENSE:
            continue
        name = get_field(t, 'category')
        amount = float(get_field(t, 'amount') or 0.0)
        if name in index:
            series[index[name]]['value'] += amount
        else:
            index[name] = len(series)
            series.append({'category': name, 'value': amount})
    return series


def trend_series(transactions):
    """Serie giornaliera {date, income, expenses} ordinata per data crescente"""
    by_day = {}
    for t in sorted(transactions, key=lambda t: to_date(get_field(t, 'date'))):
        day = to_date(get_field(t, 'date')).isoformat()
        point = by_day.setdefault(day, {'date': day, 'income': 0.0, 'expenses': 0.0})
        amount = float(get_field(t, 'amount') or 0.0)
        if get_field(t, 'type') == INCOME:
            point['income'] += amount
        else:
            point['expenses'] += amount
    return list(by_day.values())


class DashboardService:
    """Aggrega ad ogni richiesta l'intera lista delle transazioni dell'utente"""

    def __init__(self):
        self.transactions = TransactionService()

    def overview(self, user_id):
        transactions = self.transactions.get_transactions(user_id)
        return {
            'summary': calculate_summary(transactions),
            'expensesByCategory': expenses_by_category(transactions),
            'trend': trend_series(transactions),
        }

    def health_overview(self, user_id, today=None):
        transactions = self.transactions.get_transactions(user_id)
        metrics = calculate_financial_metrics(transactions, today)
        health = get_financial_health(metrics)
        return {
            'metrics': metrics.to_dict(),
            'health': health.to_dict(),
            'expenseCategoryData': [
                {'name': 'Essenciais', 'value': metrics.expense_categories.essential},
                {'name': 'Não Essenciais', 'value': metrics.expense_categories.non_essential},
                {'name': 'Economia', 'value': metrics.expense_categories.savings},
            ],
        }
