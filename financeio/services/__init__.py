"""
Servizio base per la gestione della business logic
"""
from financeio import db
from datetime import date, timedelta
from dateutil.relativedelta import relativedelta
import logging

logger = logging.getLogger(__name__)

# Esporta le funzioni per l'import diretto
__all__ = ['BaseService', 'get_month_boundaries', 'get_timeframe_boundaries', 'period_key']


class BaseService:
    """Classe base per i servizi con metodi comuni"""

    def __init__(self):
        self.db = db

    def save(self, obj):
        """Salva un oggetto nel database"""
        try:
            self.db.session.add(obj)
            self.db.session.commit()
            return True, "Operação concluída com sucesso"
        except Exception as e:
            self.db.session.rollback()
            logger.exception('Errore nel salvataggio di %r', obj)
            return False, str(e)

    def delete(self, obj):
        """Elimina un oggetto dal database"""
        try:
            self.db.session.delete(obj)
            self.db.session.commit()
            return True, "Exclusão concluída com sucesso"
        except Exception as e:
            self.db.session.rollback()
            logger.exception('Errore nell\'eliminazione di %r', obj)
            return False, str(e)

    def update(self, obj, **kwargs):
        """Aggiorna un oggetto con i parametri forniti"""
        try:
            for key, value in kwargs.items():
                if hasattr(obj, key):
                    setattr(obj, key, value)
            self.db.session.commit()
            return True, "Atualização concluída com sucesso"
        except Exception as e:
            self.db.session.rollback()
            logger.exception('Errore nell\'aggiornamento di %r', obj)
            return False, str(e)


def get_month_boundaries(date_obj):
    """Primo e ultimo giorno del mese di calendario che contiene `date_obj`"""
    start_date = date_obj.replace(day=1)
    end_date = start_date + relativedelta(months=1) - relativedelta(days=1)
    return start_date, end_date


def get_timeframe_boundaries(timeframe, today=None):
    """Confini del periodo di un report.

    - ``week``: ultimi 7 giorni (oggi incluso)
    - ``month``: mese di calendario corrente
    - ``year``: anno di calendario corrente
    """
    if today is None:
        today = date.today()
    if timeframe == 'week':
        return today - timedelta(days=6), today
    if timeframe == 'month':
        return get_month_boundaries(today)
    if timeframe == 'year':
        return date(today.year, 1, 1), date(today.year, 12, 31)
    raise ValueError(f"Período inválido: {timeframe}")


def period_key(date_obj):
    """Identificativo del mese nel formato YYYY-MM"""
    return date_obj.strftime('%Y-%m')
