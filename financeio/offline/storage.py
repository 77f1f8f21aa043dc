"""
Storage chiave/valore su file JSON, equivalente del localStorage del browser.

Ogni chiave contiene un valore serializzato in JSON; la scrittura sostituisce
l'intero file (ultima scrittura vince).
"""
import json
import logging
import os
import tempfile

logger = logging.getLogger(__name__)


class LocalStorage:

    def __init__(self, path):
        self.path = path

    def _load(self):
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except ValueError:
            logger.warning('Storage locale corrotto (%s): viene ignorato', self.path)
            return {}

    def _dump(self, data):
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, suffix='.tmp')
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False)
        os.replace(tmp_path, self.path)

    def get_item(self, key, default=None):
        return self._load().get(key, default)

    def set_item(self, key, value):
        data = self._load()
        data[key] = value
        self._dump(data)

    def remove_item(self, key):
        data = self._load()
        if key in data:
            del data[key]
            self._dump(data)

    def keys(self):
        return list(self._load().keys())
