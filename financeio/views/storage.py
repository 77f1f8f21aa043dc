"""
Blueprint per l'archivio chiave/valore dell'utente.

Il client salva qui le stesse chiavi del localStorage; nessuna risoluzione
dei conflitti: l'ultima scrittura sovrascrive.
"""
from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from financeio.defaults import (
    STORAGE_CATEGORIES, STORAGE_TRANSACTIONS, STORAGE_OFFLINE_DATA, STORAGE_REPORTS_USED,
)
from financeio.services.storage.kv_store_service import KeyValueStoreService

storage_bp = Blueprint('storage', __name__)

ALLOWED_KEYS = (STORAGE_CATEGORIES, STORAGE_TRANSACTIONS, STORAGE_OFFLINE_DATA)
READ_ONLY_KEYS = (STORAGE_REPORTS_USED,)


@storage_bp.route('/<key>', methods=['GET'])
@login_required
def get_item(key):
    if key not in ALLOWED_KEYS + READ_ONLY_KEYS:
        return jsonify({'message': 'Chave desconhecida'}), 404
    return jsonify({'key': key, 'value': KeyValueStoreService().get_item(current_user.id, key)})


@storage_bp.route('/<key>', methods=['PUT'])
@login_required
def set_item(key):
    if key not in ALLOWED_KEYS:
        return jsonify({'message': 'Chave desconhecida'}), 404
    data = request.get_json(silent=True) or {}
    ok, msg = KeyValueStoreService().set_item(current_user.id, key, data.get('value'))
    if not ok:
        return jsonify({'message': msg}), 500
    return jsonify({'key': key, 'value': data.get('value')})


@storage_bp.route('/<key>', methods=['DELETE'])
@login_required
def remove_item(key):
    if key not in ALLOWED_KEYS:
        return jsonify({'message': 'Chave desconhecida'}), 404
    ok, msg = KeyValueStoreService().remove_item(current_user.id, key)
    if not ok:
        return jsonify({'message': msg}), 500
    return jsonify({'message': msg})
