"""
Blueprint per le transazioni
Ogni risposta include un `message` usato dal client come notifica (toast)
"""
from flask import Blueprint, jsonify, request, current_app, send_file
from flask_login import current_user, login_required

from financeio.services.transactions.transactions_service import TransactionService, calculate_summary
from financeio.services.export.export_service import export_transactions_xlsx

transactions_bp = Blueprint('transactions', __name__)


@transactions_bp.route('/', methods=['GET'])
@login_required
def lista():
    service = TransactionService()
    transactions = service.get_transactions(current_user.id, type_filter=request.args.get('type'))
    return jsonify({
        'transactions': [t.to_dict() for t in transactions],
        'summary': calculate_summary(transactions),
    })


@transactions_bp.route('/', methods=['POST'])
@login_required
def aggiungi():
    data = request.get_json(silent=True) or {}
    try:
        ok, msg, transaction = TransactionService().add_transaction(
            current_user.id,
            description=data.get('description'),
            amount=data.get('amount'),
            type=data.get('type'),
            category=data.get('category'),
            date=data.get('date'),
        )
    except Exception as e:
        current_app.logger.exception('Error adding transaction: %s', e)
        return jsonify({'message': 'Erro ao salvar transação. Tente novamente.'}), 500
    if not ok:
        return jsonify({'message': msg}), 400
    return jsonify({'message': msg, 'transaction': transaction.to_dict()}), 201


@transactions_bp.route('/<int:transaction_id>', methods=['GET'])
@login_required
def dettaglio(transaction_id):
    transaction = TransactionService().get_transaction(current_user.id, transaction_id)
    if not transaction:
        return jsonify({'message': 'Transação não encontrada'}), 404
    return jsonify({'transaction': transaction.to_dict()})


@transactions_bp.route('/<int:transaction_id>', methods=['PUT'])
@login_required
def modifica(transaction_id):
    data = request.get_json(silent=True) or {}
    changes = {k: data[k] for k in ('description', 'amount', 'type', 'category', 'date') if k in data}
    try:
        ok, msg, transaction = TransactionService().update_transaction(current_user.id, transaction_id, **changes)
    except Exception as e:
        current_app.logger.exception('Error updating transaction: %s', e)
        return jsonify({'message': 'Erro ao atualizar transação. Tente novamente.'}), 500
    if not ok:
        return jsonify({'message': msg}), 404 if msg == 'Transação não encontrada' else 400
    return jsonify({'message': msg, 'transaction': transaction.to_dict()})


@transactions_bp.route('/<int:transaction_id>', methods=['DELETE'])
@login_required
def elimina(transaction_id):
    try:
        ok, msg = TransactionService().delete_transaction(current_user.id, transaction_id)
    except Exception as e:
        current_app.logger.exception('Error deleting transaction: %s', e)
        return jsonify({'message': 'Erro ao excluir transação. Tente novamente.'}), 500
    if not ok:
        return jsonify({'message': msg}), 404 if msg == 'Transação não encontrada' else 500
    return jsonify({'message': msg})


@transactions_bp.route('/export', methods=['GET'])
@login_required
def esporta():
    """Esportazione xlsx riservata al piano Pro"""
    if not current_user.is_pro:
        return jsonify({'message': 'Exportação de dados disponível apenas no plano Pro'}), 403
    try:
        buffer = export_transactions_xlsx(current_user)
    except Exception as e:
        current_app.logger.exception('Errore nell\'esportazione: %s', e)
        return jsonify({'message': 'Erro ao exportar transações.'}), 500
    return send_file(
        buffer,
        as_attachment=True,
        download_name='transacoes.xlsx',
        mimetype='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
    )
