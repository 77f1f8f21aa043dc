"""
Blueprint per Stripe: sessione di checkout e webhook del ciclo di vita
dell'abbonamento
"""
from flask import Blueprint, jsonify, request, current_app
from flask_login import current_user, login_required

from financeio.exceptions import PaymentError, WebhookSignatureError
from financeio.services.payments.stripe_service import StripeService

stripe_bp = Blueprint('stripe', __name__)


@stripe_bp.route('/create-checkout-session', methods=['POST'])
@login_required
def create_checkout_session():
    try:
        url = StripeService().create_checkout_session(current_user)
    except PaymentError as e:
        current_app.logger.error('Erro ao criar sessão de checkout: %s', e)
        return jsonify({'error': 'Erro ao criar sessão de checkout'}), 500
    return jsonify({'url': url})


@stripe_bp.route('/webhook', methods=['POST'])
def webhook():
    payload = request.get_data()
    signature = request.headers.get('Stripe-Signature', '')
    try:
        StripeService().handle_webhook(payload, signature)
    except WebhookSignatureError:
        return jsonify({'error': 'Webhook error'}), 400
    except Exception as e:
        current_app.logger.exception('Erro no webhook: %s', e)
        return jsonify({'error': 'Webhook error'}), 500
    return jsonify({'received': True})
