"""
Servizio per la generazione dei report con quota mensile per il piano gratuito
"""
from datetime import date
import logging

from flask import current_app

from financeio.defaults import STORAGE_REPORTS_USED, TIMEFRAME_LABELS
from financeio.exceptions import ReportGenerationError, ReportQuotaExceeded
from financeio.services import period_key
from financeio.services.reports.deepseek_client import DeepSeekClient
from financeio.services.reports.local_report import build_report_prompt, generate_local_report
from financeio.services.reports.report_data import build_financial_data
from financeio.services.storage.kv_store_service import KeyValueStoreService
from financeio.services.transactions.transactions_service import TransactionService

logger = logging.getLogger(__name__)

MAX_COUNTER_ATTEMPTS = 3


class ReportService:
    """Orchestrazione: dati -> motore (locale o remoto) -> contatore d'uso"""

    def __init__(self, engine=None, client=None, rng=None):
        self.engine = engine or current_app.config.get('REPORT_ENGINE', 'local')
        self.limit = current_app.config.get('FREE_REPORTS_PER_MONTH', 5)
        self.client = client
        self.rng = rng
        self.kv = KeyValueStoreService()
        self.transactions = TransactionService()

    def _counter(self, user, today):
        """Valore salvato sotto `reportsUsed` e report usati nel mese di `today`"""
        stored = self.kv.get_item(user.id, STORAGE_REPORTS_USED)
        if not isinstance(stored, dict) or stored.get('period') != period_key(today):
            return stored, 0
        return stored, stored.get('count', 0)

    def _quota(self, user, used):
        if user.is_pro:
            return {'used': used, 'limit': None, 'remaining': None}
        return {'used': used, 'limit': self.limit, 'remaining': max(self.limit - used, 0)}

    def usage(self, user, today=None):
        """Report usati nel mese corrente e quota residua (None = illimitato)"""
        _, used = self._counter(user, today or date.today())
        return self._quota(user, used)

    def _check_quota(self, user, used):
        usage = self._quota(user, used)
        if usage['limit'] is not None and used >= usage['limit']:
            raise ReportQuotaExceeded(used, usage['limit'])

    def _record_usage(self, user, stored, used, today):
        """Incrementa il contatore solo se nessun'altra richiesta l'ha già modificato"""
        for _ in range(MAX_COUNTER_ATTEMPTS):
            counter = {'period': period_key(today), 'count': used + 1}
            if self.kv.compare_and_set(user.id, STORAGE_REPORTS_USED, stored, counter):
                return
            stored, used = self._counter(user, today)
            self._check_quota(user, used)
        logger.error('Impossibile aggiornare il contatore dei report per utente %s', user.id)

    def _render(self, data):
        if self.engine == 'remote':
            client = self.client or DeepSeekClient.from_config(current_app.config)
            return client.generate(build_report_prompt(data))
        if self.engine == 'local':
            return generate_local_report(data, self.rng)
        raise ReportGenerationError(f'Motor de relatórios desconhecido: {self.engine}')

    def generate(self, user, timeframe='month', today=None):
        if timeframe not in TIMEFRAME_LABELS:
            raise ReportGenerationError(f'Período inválido: {timeframe}')
        today = today or date.today()

        stored, used = self._counter(user, today)
        self._check_quota(user, used)

        transactions = self.transactions.get_transactions(user.id)
        data = build_financial_data(transactions, timeframe, today)
        report = self._render(data)

        self._record_usage(user, stored, used, today)
        logger.info('Relatório %s gerado para o usuário %s (engine=%s)', timeframe, user.id, self.engine)
        return report
