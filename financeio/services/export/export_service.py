"""Esportazione delle transazioni in formato xlsx (funzionalità del piano Pro)"""
import io
import logging

import openpyxl
from openpyxl.styles import Font

from financeio.services.transactions.transactions_service import TransactionService, calculate_summary

logger = logging.getLogger(__name__)

TEXT_COLUMNS = (2, 3)

HEADERS = ['Data', 'Descrição', 'Categoria', 'Tipo', 'Valor']
TYPE_LABELS = {'income': 'Receita', 'expense': 'Despesa'}


def export_transactions_xlsx(user):
    """Restituisce un buffer BytesIO con il foglio 'Transações' dell'utente"""
    transactions = TransactionService().get_transactions(user.id)

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = 'Transações'
    for i, h in enumerate(HEADERS, 1):
        ws.cell(row=1, column=i, value=h).font = Font(bold=True)

    for r_idx, t in enumerate(transactions, 2):
        ws.cell(row=r_idx, column=1, value=t.date)
        ws.cell(row=r_idx, column=2, value=t.description)
        ws.cell(row=r_idx, column=3, value=t.category)
        for column in TEXT_COLUMNS:
            # testo dell'utente: mai interpretato come formula
            ws.cell(row=r_idx, column=column).data_type = 's'
        ws.cell(row=r_idx, column=4, value=TYPE_LABELS.get(t.type, t.type))
        ws.cell(row=r_idx, column=5, value=t.amount).number_format = '#,##0.00'

    summary = calculate_summary(transactions)
    footer = len(transactions) + 3
    for offset, (label, key) in enumerate([('Receitas', 'totalIncome'), ('Despesas', 'totalExpenses'), ('Saldo', 'balance')]):
        ws.cell(row=footer + offset, column=4, value=label).font = Font(bold=True)
        ws.cell(row=footer + offset, column=5, value=summary[key]).number_format = '#,##0.00'

    buffer = io.BytesIO()
    wb.save(buffer)
    buffer.seek(0)
    logger.info('Esportate %s transazioni per utente %s', len(transactions), user.id)
    return buffer
