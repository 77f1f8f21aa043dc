"""
Modelli del database

Import esplicito dei modelli per assicurare che siano registrati quando l'app
chiama db.create_all().
"""
from financeio.models.User import User  # noqa: F401
from financeio.models.Transactions import Transaction  # noqa: F401
from financeio.models.Categories import Category  # noqa: F401
from financeio.models.KeyValueStore import KeyValueItem  # noqa: F401
