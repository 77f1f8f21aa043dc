"""
Default data values separated from operational configuration.

Questo modulo contiene i valori di 'contenuto' usati dall'app (categorie
predefinite, parole chiave delle spese essenziali, chiavi di storage, testi dei
suggerimenti) che non dovrebbero essere miscelati con le impostazioni operative
del runtime (DB, SECRET_KEY, chiavi dei provider di pagamento, ecc.).
"""

INCOME = 'income'
EXPENSE = 'expense'
TRANSACTION_TYPES = (INCOME, EXPENSE)

# Categorie predefinite (nome, tipo) - seminate per ogni nuovo utente
DEFAULT_CATEGORIES = [
    # Receitas
    ('Salário', INCOME),
    ('Freelance', INCOME),
    ('Investimentos', INCOME),
    ('Vendas', INCOME),
    ('Outros', INCOME),

    # Despesas
    ('Alimentação', EXPENSE),
    ('Transporte', EXPENSE),
    ('Moradia', EXPENSE),
    ('Utilidades', EXPENSE),
    ('Lazer', EXPENSE),
    ('Saúde', EXPENSE),
    ('Educação', EXPENSE),
    ('Compras', EXPENSE),
    ('Outros', EXPENSE),
]

# Categorie di spesa considerate essenziali (confronto sul nome in minuscolo)
ESSENTIAL_CATEGORIES = [
    'moradia',
    'alimentação',
    'saúde',
    'transporte',
    'educação',
    'contas',
    'utilities',
]

# Categoria di entrata che rappresenta i risparmi accumulati
SAVINGS_CATEGORY = 'poupança'

# Parole chiave che identificano le spese per debiti
DEBT_KEYWORDS = ('dívida', 'financiamento')

# Chiavi di storage (equivalenti alle chiavi del localStorage del browser)
STORAGE_CATEGORIES = 'categories'
STORAGE_TRANSACTIONS = 'transactions'
STORAGE_OFFLINE_DATA = 'finance-io-offline-data'
STORAGE_REPORTS_USED = 'reportsUsed'

# Suggerimenti mensili mostrati in fondo al report
MONTHLY_TIPS = [
    'Estabeleça metas financeiras específicas e mensuráveis para manter o foco.',
    'Considere usar a regra 50/30/20: 50% para necessidades, 30% para desejos e 20% para economia.',
    'Revise suas assinaturas e serviços recorrentes para identificar gastos desnecessários.',
    'Pesquise preços e use aplicativos de desconto antes de fazer compras significativas.',
    'Mantenha um registro detalhado de todos os gastos para identificar padrões e oportunidades de economia.',
]

# Etichette dei periodi del report
TIMEFRAME_LABELS = {
    'week': 'semanal',
    'month': 'mensal',
    'year': 'anual',
}
