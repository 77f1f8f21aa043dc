"""Configurazione per l'applicazione Finance IO"""
import os
from datetime import timedelta
from dotenv import load_dotenv

# Carica le variabili dal file .env nella root del progetto (se presente)
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
load_dotenv(os.path.join(BASE_DIR, '.env'))


def _split_origins(value):
    return [o.strip() for o in value.split(',') if o.strip()]


class Config:
    """Configurazione principale dell'applicazione"""

    # Database
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        'DATABASE_URL', f'sqlite:///{os.path.join(BASE_DIR, "db", "financeio.db")}'
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Flask
    SECRET_KEY = os.environ.get('SECRET_KEY', 'finance-io-dev-secret')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    DEBUG = False
    TESTING = False

    # Sessione
    PERMANENT_SESSION_LIFETIME = timedelta(days=7)
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # Server
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', 3000))
    SITE_URL = os.environ.get('SITE_URL', 'http://localhost:8080')
    ALLOWED_ORIGINS = _split_origins(os.environ.get('ALLOWED_ORIGINS', 'http://localhost:8080'))

    # Stripe
    STRIPE_SECRET_KEY = os.environ.get('STRIPE_SECRET_KEY')
    STRIPE_WEBHOOK_SECRET = os.environ.get('STRIPE_WEBHOOK_SECRET')
    STRIPE_PRICE_ID = os.environ.get('STRIPE_PRICE_ID')
    STRIPE_PRODUCT_ID = os.environ.get('STRIPE_PRODUCT_ID')

    # PayPal
    PAYPAL_CLIENT_ID = os.environ.get('PAYPAL_CLIENT_ID')
    PAYPAL_CLIENT_SECRET = os.environ.get('PAYPAL_CLIENT_SECRET')
    PAYPAL_API_BASE = os.environ.get('PAYPAL_API_BASE', 'https://api-m.sandbox.paypal.com')
    PAYPAL_PRO_PRICE = os.environ.get('PAYPAL_PRO_PRICE', '19.90')
    PAYPAL_CURRENCY = os.environ.get('PAYPAL_CURRENCY', 'BRL')

    # Relatori
    REPORT_ENGINE = os.environ.get('REPORT_ENGINE', 'local')  # 'local' o 'remote'
    FREE_REPORTS_PER_MONTH = int(os.environ.get('FREE_REPORTS_PER_MONTH', 5))
    DEEPSEEK_API_KEY = os.environ.get('DEEPSEEK_API_KEY')
    DEEPSEEK_API_URL = os.environ.get('DEEPSEEK_API_URL', 'https://api.deepseek.com/v1/chat/completions')
    DEEPSEEK_MODEL = os.environ.get('DEEPSEEK_MODEL', 'deepseek-chat')
    DEEPSEEK_TIMEOUT = int(os.environ.get('DEEPSEEK_TIMEOUT', 60))

    # Formato valuta (usato nei report e nei filtri Jinja)
    FORMATO_VALUTA = "R$ {:.2f}"


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SECRET_KEY = 'test-secret'
    ALLOWED_ORIGINS = ['http://localhost:8080']
    STRIPE_SECRET_KEY = 'sk_test_dummy'
    STRIPE_WEBHOOK_SECRET = 'whsec_dummy'
    STRIPE_PRICE_ID = 'price_dummy'
    STRIPE_PRODUCT_ID = 'prod_dummy'
    PAYPAL_CLIENT_ID = 'paypal-client'
    PAYPAL_CLIENT_SECRET = 'paypal-secret'
    REPORT_ENGINE = 'local'
    FREE_REPORTS_PER_MONTH = 5


config = {
    'default': Config,
    'development': DevelopmentConfig,
    'testing': TestingConfig,
}
