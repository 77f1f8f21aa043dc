"""
Servizio per i pagamenti Stripe (checkout, webhook e payment intent)
"""
import json
import logging

import stripe
from flask import current_app

from financeio.exceptions import PaymentError, WebhookSignatureError
from financeio.models.User import User
from financeio.services import BaseService
from financeio.services.auth.auth_service import AuthService

logger = logging.getLogger(__name__)

SUBSCRIPTION_ACTIVATED = ('customer.subscription.created', 'customer.subscription.updated')
SUBSCRIPTION_DELETED = 'customer.subscription.deleted'


class StripeService(BaseService):
    """Servizio per la gestione dei pagamenti Stripe"""

    def __init__(self):
        super().__init__()
        self.config = current_app.config
        stripe.api_key = self.config.get('STRIPE_SECRET_KEY')

    # === Checkout ===

    def get_or_create_customer(self, user):
        """Riusa il cliente Stripe trovato per email, altrimenti lo crea"""
        existing = stripe.Customer.list(email=user.email, limit=1)
        if existing.data:
            customer_id = existing.data[0].id
        else:
            customer = stripe.Customer.create(email=user.email, metadata={'userId': str(user.id)})
            customer_id = customer.id

        if user.stripe_customer_id != customer_id:
            self.update(user, stripe_customer_id=customer_id)
        return customer_id

    def create_checkout_session(self, user):
        """Crea una sessione di checkout in modalità abbonamento; restituisce l'URL"""
        site_url = self.config.get('SITE_URL')
        try:
            customer_id = self.get_or_create_customer(user)
            session = stripe.checkout.Session.create(
                customer=customer_id,
                line_items=[{'price': self.config.get('STRIPE_PRICE_ID'), 'quantity': 1}],
                mode='subscription',
                success_url=f'{site_url}/dashboard?success=true',
                cancel_url=f'{site_url}/dashboard?canceled=true',
                metadata={'userId': str(user.id)},
                # il webhook legge userId dai metadata dell'abbonamento
                subscription_data={'metadata': {'userId': str(user.id)}},
            )
        except stripe.StripeError as e:
            logger.exception('Erro ao criar sessão de checkout')
            raise PaymentError('Erro ao criar sessão de checkout') from e
        return session.url

    # === Webhook ===

    def construct_event(self, payload, signature):
        """Verifica la firma e restituisce l'evento come dizionario"""
        try:
            stripe.Webhook.construct_event(payload, signature, self.config.get('STRIPE_WEBHOOK_SECRET'))
        except (ValueError, stripe.SignatureVerificationError) as e:
            logger.warning('Erro ao validar webhook: %s', e)
            raise WebhookSignatureError('Webhook error') from e
        if isinstance(payload, bytes):
            payload = payload.decode('utf-8')
        return json.loads(payload)

    def _resolve_user_id(self, subscription):
        user_id = (subscription.get('metadata') or {}).get('userId')
        if user_id:
            try:
                return int(user_id)
            except (TypeError, ValueError):
                logger.error('userId non valido nei metadata dell\'abbonamento: %r', user_id)
                return None
        customer_id = subscription.get('customer')
        if customer_id:
            user = User.query.filter_by(stripe_customer_id=customer_id).first()
            if user:
                return user.id
        return None

    def handle_event(self, event):
        """Aggiorna lo stato Pro in base agli eventi del ciclo di vita dell'abbonamento.

        Gli errori nell'aggiornamento vengono solo registrati: il webhook
        conferma comunque la ricezione.
        """
        event_type = event.get('type')
        subscription = (event.get('data') or {}).get('object') or {}

        if event_type in SUBSCRIPTION_ACTIVATED:
            if subscription.get('status') != 'active':
                return None
            is_pro = True
        elif event_type == SUBSCRIPTION_DELETED:
            is_pro = False
        else:
            return None

        user_id = self._resolve_user_id(subscription)
        if user_id is None:
            logger.error('Evento %s senza userId associato', event_type)
            return None

        ok, msg = AuthService().set_pro_status(user_id, is_pro)
        if not ok:
            logger.error('Erro ao atualizar status pro do usuário %s: %s', user_id, msg)
        return is_pro

    def handle_webhook(self, payload, signature):
        event = self.construct_event(payload, signature)
        return self.handle_event(event)

    # === Relay: payment intent ===

    def create_payment_intent(self):
        """Crea cliente + abbonamento incompleto e restituisce il client secret"""
        logger.info('Criando customer...')
        customer = stripe.Customer.create()
        logger.info('Customer criado: %s', customer.id)

        prices = stripe.Price.list(product=self.config.get('STRIPE_PRODUCT_ID'), active=True, limit=1)
        logger.info('Preços encontrados: %s', len(prices.data))
        if not prices.data:
            raise PaymentError('Nenhum preço encontrado para o produto')
        price = prices.data[0]

        subscription = stripe.Subscription.create(
            customer=customer.id,
            items=[{'price': price.id}],
            payment_behavior='default_incomplete',
            expand=['latest_invoice.payment_intent'],
        )
        logger.info('Subscription criada: %s', subscription.id)

        invoice = getattr(subscription, 'latest_invoice', None)
        payment_intent = getattr(invoice, 'payment_intent', None) if invoice else None
        client_secret = getattr(payment_intent, 'client_secret', None) if payment_intent else None
        if not client_secret:
            raise PaymentError('Client secret não encontrado na subscription')

        return {'clientSecret': client_secret, 'subscriptionId': subscription.id}
