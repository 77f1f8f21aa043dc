"""Servizio per la gestione delle transazioni"""
import logging

from financeio.services import BaseService
from financeio.models.Transactions import Transaction
from financeio.defaults import INCOME, EXPENSE, TRANSACTION_TYPES
from financeio.utils import ValidationUtils, get_field

logger = logging.getLogger(__name__)

MAX_DESCRIPTION_LENGTH = 200


def calculate_summary(transactions):
    """Totale entrate, uscite e saldo (entrate - uscite)"""
    total_income = sum(float(get_field(t, 'amount') or 0.0) for t in transactions if get_field(t, 'type') == INCOME)
    total_expenses = sum(float(get_field(t, 'amount') or 0.0) for t in transactions if get_field(t, 'type') == EXPENSE)
    return {
        'totalIncome': total_income,
        'totalExpenses': total_expenses,
        'balance': total_income - total_expenses,
        'count': len(transactions),
    }


class TransactionService(BaseService):
    """Servizio per la gestione delle transazioni (sempre filtrate per utente)"""

    def get_transactions(self, user_id, type_filter=None):
        """Recupera le transazioni dell'utente, dalla più recente"""
        query = Transaction.query.filter_by(user_id=user_id)
        if type_filter in TRANSACTION_TYPES:
            query = query.filter(Transaction.type == type_filter)
        return query.order_by(Transaction.date.desc(), Transaction.id.desc()).all()

    def get_transaction(self, user_id, transaction_id):
        return Transaction.query.filter_by(id=transaction_id, user_id=user_id).first()

    def _validate(self, description, amount, type_, category, date_value):
        description = ValidationUtils.validate_required_field(description, 'descrição')
        if len(description) > MAX_DESCRIPTION_LENGTH:
            raise ValueError(f"A descrição deve ter no máximo {MAX_DESCRIPTION_LENGTH} caracteres")
        category = ValidationUtils.validate_required_field(category, 'categoria')
        if type_ not in TRANSACTION_TYPES:
            raise ValueError("Tipo inválido: use 'income' ou 'expense'")
        return {
            'description': description,
            'amount': ValidationUtils.validate_amount(amount),
            'type': type_,
            'category': category,
            'date': ValidationUtils.validate_date(date_value),
        }

    def add_transaction(self, user_id, description, amount, type, category, date):
        """Crea una nuova transazione"""
        try:
            fields = self._validate(description, amount, type, category, date)
        except ValueError as e:
            return False, str(e), None

        transaction = Transaction(user_id=user_id, **fields)
        success, message = self.save(transaction)
        if not success:
            return False, message, None
        logger.info('Transazione %s creata per utente %s', transaction.id, user_id)
        return True, "Sua transação foi salva com sucesso.", transaction

    def update_transaction(self, user_id, transaction_id, **changes):
        """Aggiorna una transazione esistente con i soli campi forniti"""
        transaction = self.get_transaction(user_id, transaction_id)
        if not transaction:
            return False, "Transação não encontrada", None

        merged = {
            'description': changes.get('description', transaction.description),
            'amount': changes.get('amount', transaction.amount),
            'type_': changes.get('type', transaction.type),
            'category': changes.get('category', transaction.category),
            'date_value': changes.get('date', transaction.date),
        }
        try:
            fields = self._validate(**merged)
        except ValueError as e:
            return False, str(e), None

        success, message = self.update(transaction, **fields)
        if not success:
            return False, message, None
        return True, "Transação atualizada com sucesso.", transaction

    def delete_transaction(self, user_id, transaction_id):
        """Elimina una transazione dell'utente"""
        transaction = self.get_transaction(user_id, transaction_id)
        if not transaction:
            return False, "Transação não encontrada"
        success, message = self.delete(transaction)
        if not success:
            return False, message
        return True, "A transação foi excluída com sucesso."
