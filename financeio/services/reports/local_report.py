"""
Motore locale dei report finanziari.

Genera un report testuale a partire da un `FinancialData` riempiendo un
template fisso con tasso di risparmio, analisi per categoria, maggiori spese,
raccomandazioni basate su regole e un suggerimento del mese.

Il modulo espone anche il prompt in linguaggio naturale inviato al motore
remoto e il parser inverso di quel prompt (punto di ingresso storico
`generate_report_from_prompt`).
"""
import json
import logging
import random
import re

from financeio.defaults import MONTHLY_TIPS
from financeio.exceptions import ReportGenerationError
from financeio.services.reports.report_data import FinancialData, TopExpense
from financeio.utils.formatting import format_currency, format_decimal

logger = logging.getLogger(__name__)

SAVINGS_TARGET = 20
SAVINGS_GOAL_CAP = 30
EXPENSES_ALERT_PERCENT = 80
CATEGORY_ALERT_PERCENT = 30


def _percent(part, whole):
    return (part / whole) * 100 if whole else 0.0


def _plain_number(value):
    """Numero senza zeri decimali superflui (25.0 -> 25, 25.5 -> 25.5)"""
    return f"{round(value, 1):g}"


def savings_rate_text(data):
    """Tasso di risparmio con una cifra decimale; 0.0 se non ci sono entrate"""
    return format_decimal(_percent(data.total_income - data.total_expenses, data.total_income), 1)


def generate_recommendations(data: FinancialData) -> str:
    recommendations = ['📝 RECOMENDAÇÕES']

    if data.balance < 0:
        recommendations.append('- ⚠️ Reduzir despesas imediatamente para evitar endividamento')

    if data.total_income <= 0:
        if data.total_expenses > 0:
            recommendations.append('- ⚠️ Nenhuma receita registrada no período para cobrir as despesas')
    else:
        expenses_percentage = float(format_decimal(_percent(data.total_expenses, data.total_income), 1))
        if expenses_percentage > EXPENSES_ALERT_PERCENT:
            recommendations.append('- 📉 Seus gastos estão muito altos em relação à sua renda')

        for category, amount in data.expenses_by_category.items():
            category_percentage = format_decimal(_percent(amount, data.total_income), 1)
            if float(category_percentage) > CATEGORY_ALERT_PERCENT:
                recommendations.append(
                    f'- 🔍 Gastos com {category} estão muito altos ({category_percentage}% da renda)'
                )

    if len(recommendations) == 1:
        recommendations.append('- ✨ Continue mantendo o controle dos seus gastos!')

    return '\n'.join(recommendations)


def generate_monthly_tip(data: FinancialData, rng=None) -> str:
    """Suggerimento casuale se il saldo è positivo, altrimenti sempre il primo"""
    if data.balance < 0:
        return MONTHLY_TIPS[0]
    rng = rng or random
    return rng.choice(MONTHLY_TIPS)


def generate_local_report(data: FinancialData, rng=None) -> str:
    savings_rate = savings_rate_text(data)
    savings_value = float(savings_rate)
    status = '✅ Positivo' if data.balance >= 0 else '⚠️ Negativo'

    sorted_categories = sorted(data.expenses_by_category.items(), key=lambda item: item[1], reverse=True)
    category_lines = '\n'.join(
        f'- {category}: {format_currency(amount)} ({format_decimal(_percent(amount, data.total_expenses), 1)}%)'
        for category, amount in sorted_categories
    )
    top_lines = '\n'.join(
        f'{index}. {expense.description}: {format_currency(expense.amount)} ({expense.category})'
        for index, expense in enumerate(data.top_expenses, 1)
    )

    if data.balance >= 0:
        goal_one = ('Manter o saldo positivo e aumentar a taxa de economia para '
                    f'{_plain_number(min(savings_value + 5, SAVINGS_GOAL_CAP))}%')
    else:
        goal_one = 'Reduzir despesas para alcançar um saldo positivo nos próximos meses'
    if savings_value < SAVINGS_TARGET:
        goal_three = 'Aumentar a taxa de economia para pelo menos 20%'
    else:
        goal_three = 'Considerar investimentos para seu dinheiro guardado'

    return f"""
📊 RELATÓRIO FINANCEIRO {data.timeframe.upper()} 📊

💰 VISÃO GERAL
{status}
- Receitas: {format_currency(data.total_income)} 📈
- Despesas: {format_currency(data.total_expenses)} 📉
- Saldo: {format_currency(data.balance)} {'🟢' if data.balance >= 0 else '🔴'}
- Taxa de Economia: {savings_rate}% {'🌟' if savings_value > SAVINGS_TARGET else ''}

📋 ANÁLISE DE DESPESAS POR CATEGORIA
{category_lines}

💸 MAIORES GASTOS
{top_lines}

{generate_recommendations(data)}

🎯 METAS SUGERIDAS
1. {goal_one}
2. Criar um fundo de emergência equivalente a 3-6 meses de despesas
3. {goal_three}

💡 DICA DO MÊS
{generate_monthly_tip(data, rng)}
"""


def build_report_prompt(data: FinancialData) -> str:
    """Prompt in linguaggio naturale per il motore di chat-completion"""
    categories_json = json.dumps(data.expenses_by_category, ensure_ascii=False)
    top_json = json.dumps([e.to_dict() for e in data.top_expenses], ensure_ascii=False)
    return (
        f"Analise os dados financeiros do período ({data.timeframe}) e gere um relatório detalhado.\n\n"
        "DADOS FINANCEIROS:\n"
        f"Receita total: R$ {format_decimal(data.total_income)}\n"
        f"Despesas totais: R$ {format_decimal(data.total_expenses)}\n"
        f"Saldo: R$ {format_decimal(data.balance)}\n\n"
        f"Despesas por categoria:\n{categories_json}\n\n"
        f"Maiores gastos:\n{top_json}\n\n"
        "INSTRUÇÕES:\n"
        "1. Faça uma visão geral da situação financeira.\n"
        "2. Analise as despesas por categoria e aponte excessos.\n"
        "3. Dê recomendações práticas e metas para o próximo período.\n"
        "Responda em português do Brasil."
    )


_TIMEFRAME_RE = re.compile(r'período \((.*?)\)')
_INCOME_RE = re.compile(r'Receita total: R\$ (-?[\d.]+)')
_EXPENSES_RE = re.compile(r'Despesas totais: R\$ (-?[\d.]+)')
_BALANCE_RE = re.compile(r'Saldo: R\$ (-?[\d.]+)')

_CATEGORIES_MARKER = 'Despesas por categoria:'
_TOP_MARKER = 'Maiores gastos:'
_INSTRUCTIONS_MARKER = 'INSTRUÇÕES:'


def _section(prompt, start_marker, end_marker):
    start = prompt.find(start_marker)
    end = prompt.find(end_marker)
    if start < 0 or end < 0 or end < start:
        raise ReportGenerationError('Dados financeiros não encontrados no prompt')
    return prompt[start + len(start_marker):end].strip()


def extract_financial_data(prompt: str) -> FinancialData:
    """Ricostruisce `FinancialData` da un prompt generato da `build_report_prompt`"""
    timeframe = _TIMEFRAME_RE.search(prompt)
    income = _INCOME_RE.search(prompt)
    expenses = _EXPENSES_RE.search(prompt)
    balance = _BALANCE_RE.search(prompt)
    if not (timeframe and income and expenses and balance):
        raise ReportGenerationError('Dados financeiros não encontrados no prompt')

    try:
        categories = json.loads(_section(prompt, _CATEGORIES_MARKER, _TOP_MARKER))
        top = json.loads(_section(prompt, _TOP_MARKER, _INSTRUCTIONS_MARKER))
    except json.JSONDecodeError as e:
        raise ReportGenerationError(f'Falha ao gerar relatório: {e}') from e

    return FinancialData(
        timeframe=timeframe.group(1),
        total_income=float(income.group(1)),
        total_expenses=float(expenses.group(1)),
        balance=float(balance.group(1)),
        expenses_by_category={k: float(v) for k, v in categories.items()},
        top_expenses=[
            TopExpense(description=e['description'], amount=float(e['amount']),
                       category=e['category'], date=e['date'])
            for e in top
        ],
    )


def generate_report_from_prompt(prompt: str, rng=None) -> str:
    try:
        return generate_local_report(extract_financial_data(prompt), rng)
    except ReportGenerationError:
        logger.exception('Erro ao gerar relatório a partir do prompt')
        raise
