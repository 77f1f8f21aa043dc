"""
Servizio per i pagamenti PayPal (Orders API v2) del piano Pro a prezzo fisso
"""
import logging

import requests
from flask import current_app

from financeio.exceptions import PaymentError
from financeio.services.auth.auth_service import AuthService

logger = logging.getLogger(__name__)

PRO_PLAN_DESCRIPTION = 'Finance IO - Plano Pro (mensal)'


class PaypalService:
    """Creazione e cattura degli ordini PayPal"""

    def __init__(self, session=None):
        config = current_app.config
        self.api_base = config.get('PAYPAL_API_BASE').rstrip('/')
        self.client_id = config.get('PAYPAL_CLIENT_ID')
        self.client_secret = config.get('PAYPAL_CLIENT_SECRET')
        self.price = config.get('PAYPAL_PRO_PRICE')
        self.currency = config.get('PAYPAL_CURRENCY', 'BRL')
        self.session = session or requests.Session()

    def _access_token(self):
        if not self.client_id or not self.client_secret:
            raise PaymentError('Credenciais do PayPal não configuradas')
        try:
            response = self.session.post(
                f'{self.api_base}/v1/oauth2/token',
                auth=(self.client_id, self.client_secret),
                data={'grant_type': 'client_credentials'},
                timeout=30,
            )
            response.raise_for_status()
            return response.json()['access_token']
        except (requests.RequestException, KeyError, ValueError) as e:
            logger.exception('Erro ao obter token do PayPal')
            raise PaymentError('Erro ao autenticar no PayPal') from e

    def _headers(self):
        return {
            'Authorization': f'Bearer {self._access_token()}',
            'Content-Type': 'application/json',
        }

    def create_order(self):
        """Crea un ordine per il prezzo fisso del piano Pro; restituisce l'id"""
        payload = {
            'intent': 'CAPTURE',
            'purchase_units': [{
                'description': PRO_PLAN_DESCRIPTION,
                'amount': {'currency_code': self.currency, 'value': self.price},
            }],
        }
        try:
            response = self.session.post(f'{self.api_base}/v2/checkout/orders',
                                         headers=self._headers(), json=payload, timeout=30)
            response.raise_for_status()
            order = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.exception('Erro ao criar pedido PayPal')
            raise PaymentError('Erro ao criar pedido PayPal') from e
        logger.info('Pedido PayPal criado: %s', order.get('id'))
        return order

    def capture_order(self, order_id, user):
        """Cattura l'ordine e attiva il piano Pro.

        Se il pagamento è stato catturato ma l'aggiornamento dello stato
        fallisce, restituisce ``entitlement_granted=False``: il pagamento resta
        acquisito e l'utente deve contattare il supporto.
        """
        try:
            response = self.session.post(f'{self.api_base}/v2/checkout/orders/{order_id}/capture',
                                         headers=self._headers(), timeout=30)
            response.raise_for_status()
            capture = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.exception('Erro ao capturar pedido PayPal %s', order_id)
            raise PaymentError('Erro ao capturar pagamento PayPal') from e

        status = capture.get('status')
        if status != 'COMPLETED':
            logger.warning('Pedido PayPal %s com status %s', order_id, status)
            return {'status': status, 'entitlement_granted': False}

        ok, msg = AuthService().set_pro_status(user.id, True)
        if not ok:
            logger.error('Pagamento PayPal %s capturado mas status pro não atualizado: %s', order_id, msg)
        return {'status': status, 'entitlement_granted': ok}
