"""
Servizio per l'archivio chiave/valore per utente.

Mantiene lato server le stesse chiavi che il client salva nel localStorage
(`categories`, `transactions`, `finance-io-offline-data`, `reportsUsed`).
L'ultima scrittura vince; `compare_and_set` serve per i contatori (es. `reportsUsed`).
"""
import json
import logging

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError

from financeio.services import BaseService
from financeio.models.KeyValueStore import KeyValueItem

logger = logging.getLogger(__name__)


class KeyValueStoreService(BaseService):
    """Lettura/scrittura di valori JSON per (utente, chiave)"""

    def _get(self, user_id, key):
        return KeyValueItem.query.filter_by(user_id=user_id, key=key).first()

    def get_item(self, user_id, key, default=None):
        item = self._get(user_id, key)
        if item is None or item.value is None:
            return default
        try:
            return json.loads(item.value)
        except ValueError:
            logger.warning('Valore non JSON per la chiave %s (utente %s)', key, user_id)
            return default

    def set_item(self, user_id, key, value):
        item = self._get(user_id, key)
        if item is None:
            item = KeyValueItem(user_id=user_id, key=key)
        item.value = json.dumps(value, ensure_ascii=False)
        return self.save(item)

    def remove_item(self, user_id, key):
        item = self._get(user_id, key)
        if item is None:
            return True, "Chave inexistente"
        return self.delete(item)

    def compare_and_set(self, user_id, key, expected, value):
        """Scrive `value` solo se il valore salvato è ancora `expected` (None = chiave assente).

        Restituisce False se un'altra richiesta ha modificato la chiave nel frattempo.
        """
        new_value = json.dumps(value, ensure_ascii=False)
        try:
            if expected is None:
                self.db.session.add(KeyValueItem(user_id=user_id, key=key, value=new_value))
            else:
                result = self.db.session.execute(
                    update(KeyValueItem)
                    .where(KeyValueItem.user_id == user_id, KeyValueItem.key == key,
                           KeyValueItem.value == json.dumps(expected, ensure_ascii=False))
                    .values(value=new_value)
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount != 1:
                    self.db.session.rollback()
                    return False
            self.db.session.commit()
            return True
        except IntegrityError:
            self.db.session.rollback()
            return False
