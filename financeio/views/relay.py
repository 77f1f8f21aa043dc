"""
Relay verso Stripe: un solo endpoint che crea il payment intent di un nuovo
abbonamento. Il CORS (Flask-Cors) è limitato alle origini di ALLOWED_ORIGINS.
"""
from flask import Blueprint, jsonify, current_app

from financeio.services.payments.stripe_service import StripeService

relay_bp = Blueprint('relay', __name__)


@relay_bp.route('/create-payment-intent', methods=['POST'])
def create_payment_intent():
    current_app.logger.info('Recebida requisição para criar payment intent')
    try:
        result = StripeService().create_payment_intent()
    except Exception as e:
        current_app.logger.exception('Erro detalhado: %s', e)
        body = {'message': 'Erro ao processar pagamento', 'error': str(e)}
        if current_app.config.get('DEBUG'):
            body['details'] = repr(e)
        return jsonify(body), 500
    current_app.logger.info('Resposta enviada com sucesso')
    return jsonify(result)
