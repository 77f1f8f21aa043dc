"""
Blueprint per le categorie
Gestisce la lista e le operazioni sulle categorie dell'utente
"""
from flask import Blueprint, jsonify, request, current_app
from flask_login import current_user, login_required

from financeio.services.categories.categories_service import CategoriesService

categories_bp = Blueprint('categories', __name__)


@categories_bp.route('/', methods=['GET'])
@login_required
def lista():
	categories = CategoriesService().get_all_categories(current_user.id, type_filter=request.args.get('type'))
	return jsonify({'categories': [c.to_dict() for c in categories]})


@categories_bp.route('/', methods=['POST'])
@login_required
def aggiungi():
	data = request.get_json(silent=True) or {}
	try:
		ok, msg, category = CategoriesService().create_category(current_user.id, data.get('name'), data.get('type'))
	except Exception as e:
		current_app.logger.exception('Errore durante l\'aggiunta della categoria: %s', e)
		return jsonify({'message': 'Erro ao adicionar categoria.'}), 500
	if not ok:
		return jsonify({'message': msg}), 400
	return jsonify({'message': msg, 'category': category.to_dict()}), 201


@categories_bp.route('/<int:category_id>', methods=['PUT'])
@login_required
def modifica(category_id):
	data = request.get_json(silent=True) or {}
	try:
		ok, msg, category = CategoriesService().rename_category(current_user.id, category_id, data.get('name'))
	except Exception as e:
		current_app.logger.exception('Errore nella modifica della categoria: %s', e)
		return jsonify({'message': 'Erro ao atualizar categoria.'}), 500
	if not ok:
		return jsonify({'message': msg}), 404 if msg == 'Categoria não encontrada' else 400
	return jsonify({'message': msg, 'category': category.to_dict()})


@categories_bp.route('/<int:category_id>', methods=['DELETE'])
@login_required
def elimina(category_id):
	try:
		ok, msg = CategoriesService().delete_category(current_user.id, category_id)
	except Exception as e:
		current_app.logger.exception('Errore nell\'eliminazione della categoria: %s', e)
		return jsonify({'message': 'Erro ao excluir categoria.'}), 500
	if not ok:
		return jsonify({'message': msg}), 404 if msg == 'Categoria não encontrada' else 500
	return jsonify({'message': msg})
