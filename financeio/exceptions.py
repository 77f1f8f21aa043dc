"""Eccezioni applicative di Finance IO"""


class FinanceIOError(Exception):
    """Errore base dell'applicazione"""


class ReportGenerationError(FinanceIOError):
    """Il report finanziario non può essere generato"""


class ReportQuotaExceeded(FinanceIOError):
    """L'utente del piano gratuito ha esaurito i report del mese"""

    def __init__(self, used, limit):
        super().__init__(f'Limite de {limit} relatórios por mês atingido')
        self.used = used
        self.limit = limit


class PaymentError(FinanceIOError):
    """Errore durante la comunicazione con un provider di pagamento"""


class WebhookSignatureError(PaymentError):
    """Firma del webhook non valida"""


class OfflineDataUnavailable(FinanceIOError):
    """Nessuna risposta in cache per una richiesta fatta offline"""
