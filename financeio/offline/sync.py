"""
Client HTTP con supporto offline per l'API di Finance IO.

- GET: prima la rete; le risposte JSON vengono messe in cache e restituite
  quando la rete non è raggiungibile.
- POST/PUT: se la rete non è raggiungibile la richiesta viene accodata sotto la
  chiave `finance-io-offline-data` e viene restituita una risposta "offline".
- sync(): ripete le richieste accodate una alla volta, in ordine di timestamp;
  le richieste riuscite escono dalla coda, quelle fallite restano accodate.
"""
from dataclasses import dataclass, field
from typing import List
import logging
import time

import requests

from financeio.defaults import STORAGE_OFFLINE_DATA
from financeio.exceptions import OfflineDataUnavailable

logger = logging.getLogger(__name__)

CACHE_KEY = 'finance-io-cache'
QUEUED_METHODS = ('POST', 'PUT')
OFFLINE_RESPONSE = {
    'status': 'offline',
    'message': 'Dados serão sincronizados quando houver conexão',
}


@dataclass
class SyncResult:
    synced: int = 0
    failed: List[dict] = field(default_factory=list)

    @property
    def remaining(self):
        return len(self.failed)

    def to_string(self):
        return f"Sincronizados: {self.synced} | Pendentes: {self.remaining}"


class OfflineSyncClient:

    def __init__(self, base_url, storage, session=None, timeout=15, clock=time.time):
        self.base_url = base_url.rstrip('/')
        self.storage = storage
        self.session = session or requests.Session()
        self.timeout = timeout
        self.clock = clock

    def _url(self, path):
        if path.startswith('http://') or path.startswith('https://'):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    # === Coda offline ===

    def pending(self):
        return list(self.storage.get_item(STORAGE_OFFLINE_DATA, []) or [])

    def _enqueue(self, url, method, data):
        queue = self.pending()
        queue.append({
            'url': url,
            'method': method,
            'data': data,
            'timestamp': int(self.clock() * 1000),
        })
        self.storage.set_item(STORAGE_OFFLINE_DATA, queue)
        logger.info('Richiesta %s %s accodata offline (%s in coda)', method, url, len(queue))

    # === Cache delle GET ===

    def _cache_put(self, url, payload):
        cache = self.storage.get_item(CACHE_KEY, {}) or {}
        cache[url] = payload
        self.storage.set_item(CACHE_KEY, cache)

    def _cache_get(self, url):
        cache = self.storage.get_item(CACHE_KEY, {}) or {}
        if url not in cache:
            raise OfflineDataUnavailable(f'Sem conexão e sem dados em cache para {url}')
        return cache[url]

    # === Richieste ===

    def login(self, email, password):
        response = self.session.post(self._url('/api/auth/login'),
                                     json={'email': email, 'password': password}, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def request(self, method, path, json=None):
        method = method.upper()
        url = self._url(path)
        try:
            response = self.session.request(method, url, json=json, timeout=self.timeout)
        except (requests.ConnectionError, requests.Timeout):
            if method in QUEUED_METHODS:
                self._enqueue(url, method, json)
                return dict(OFFLINE_RESPONSE)
            if method == 'GET':
                logger.info('Offline: risposta dalla cache per %s', url)
                return self._cache_get(url)
            raise

        response.raise_for_status()
        payload = response.json() if response.content else None
        if method == 'GET':
            self._cache_put(url, payload)
        return payload

    def get(self, path):
        return self.request('GET', path)

    def post(self, path, json=None):
        return self.request('POST', path, json=json)

    def put(self, path, json=None):
        return self.request('PUT', path, json=json)

    def delete(self, path):
        return self.request('DELETE', path)

    def sync(self):
        """Svuota la coda offline ripetendo le richieste in ordine di timestamp"""
        queue = sorted(self.pending(), key=lambda item: item.get('timestamp', 0))
        result = SyncResult()
        if not queue:
            return result

        index = 0
        try:
            for index, item in enumerate(queue):
                try:
                    response = self.session.request(item['method'], item['url'], json=item.get('data'),
                                                    timeout=self.timeout)
                    response.raise_for_status()
                    result.synced += 1
                except (requests.ConnectionError, requests.Timeout):
                    # ancora offline: le richieste restanti rimangono in coda
                    logger.warning('Sincronizzazione interrotta: rete non disponibile')
                    result.failed.extend(queue[index:])
                    break
                except (requests.RequestException, KeyError, TypeError) as e:
                    logger.error('Sincronizzazione fallita per %r: %s', item, e)
                    result.failed.append(item)
        except Exception:
            # la richiesta corrente e le successive restano in coda
            result.failed.extend(queue[index:])
            raise
        finally:
            if result.failed:
                self.storage.set_item(STORAGE_OFFLINE_DATA, result.failed)
            else:
                self.storage.remove_item(STORAGE_OFFLINE_DATA)
        logger.info(result.to_string())
        return result
