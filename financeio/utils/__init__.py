"""
Utilità comuni per l'applicazione
"""
from datetime import datetime, date
import math


def get_field(obj, name, default=None):
    """Legge un attributo da un modello ORM o da un dizionario JSON"""
    if isinstance(obj, dict):
        return obj.get(name, default)
    return getattr(obj, name, default)


def to_date(value):
    """Converte una data ISO (o datetime) in `date`"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.fromisoformat(str(value)[:10]).date()


class ValidationUtils:
    """Utilità per la validazione"""

    @staticmethod
    def validate_amount(amount):
        """Valida e converte un importo (mai negativo)"""
        try:
            if isinstance(amount, str):
                amount = amount.replace(',', '.')
            value = float(amount)
        except (TypeError, ValueError):
            raise ValueError("Valor inválido")
        if not math.isfinite(value):
            raise ValueError("Valor inválido")
        if value < 0:
            raise ValueError("O valor não pode ser negativo")
        return value

    @staticmethod
    def validate_date(date_value):
        """Valida e converte una data (YYYY-MM-DD)"""
        if isinstance(date_value, date):
            return date_value
        try:
            return datetime.strptime(str(date_value), '%Y-%m-%d').date()
        except ValueError:
            raise ValueError("Formato de data inválido (YYYY-MM-DD)")

    @staticmethod
    def validate_required_field(value, field_name):
        """Valida che un campo obbligatorio non sia vuoto"""
        if not value or not str(value).strip():
            raise ValueError(f"O campo {field_name} é obrigatório")
        return str(value).strip()
