"""Blueprint per i pagamenti PayPal del piano Pro."""
from flask import Blueprint, jsonify, request, current_app
from flask_login import current_user, login_required

from financeio.exceptions import PaymentError
from financeio.services.payments.paypal_service import PaypalService

paypal_bp = Blueprint('paypal', __name__)


@paypal_bp.route('/orders', methods=['POST'])
@login_required
def create_order():
    try:
        order = PaypalService().create_order()
    except PaymentError as e:
        return jsonify({'message': str(e)}), 502
    return jsonify({'id': order.get('id'), 'status': order.get('status')}), 201


@paypal_bp.route('/orders/<order_id>/capture', methods=['POST'])
@login_required
def capture_order(order_id):
    try:
        result = PaypalService().capture_order(order_id, current_user)
    except PaymentError as e:
        return jsonify({'message': str(e)}), 502

    if result['status'] != 'COMPLETED':
        return jsonify({'message': 'Pagamento não concluído', **result}), 402
    if not result['entitlement_granted']:
        current_app.logger.error('Pagamento capturado sem ativação do Pro (order=%s, user=%s)',
                                 order_id, current_user.id)
        return jsonify({
            'message': 'Seu pagamento foi processado, mas houve um erro ao atualizar seu status. '
                       'Entre em contato com o suporte.',
            **result,
        }), 500
    return jsonify({
        'message': 'Você agora tem acesso a todos os recursos do plano Pro.',
        **result,
    })
