"""Applicazione Flask per il controllo delle finanze personali (Finance IO)"""

from flask import Flask, jsonify
from flask_cors import CORS
from flask_login import LoginManager
from flask_sqlalchemy import SQLAlchemy
import logging
import os
from financeio.config import config

# Istanze globali
db = SQLAlchemy()
login_manager = LoginManager()


def create_app(config_name=None):
    """Factory pattern per creare l'applicazione Flask"""
    if config_name is None:
        config_name = os.environ.get('FINANCEIO_ENV', 'default')

    app = Flask(__name__)
    app.config.from_object(config[config_name])

    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
    )

    # Inizializza le estensioni
    db.init_app(app)
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        from financeio.models.User import User
        return db.session.get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'message': 'Autenticação necessária'}), 401

    # Importa e registra i blueprint
    from financeio.views.main import main_bp
    from financeio.views.auth import auth_bp
    from financeio.views.transactions.transactions import transactions_bp
    from financeio.views.transactions.categories import categories_bp
    from financeio.views.dashboard import dashboard_bp
    from financeio.views.reports import reports_bp
    from financeio.views.payments.stripe import stripe_bp
    from financeio.views.payments.paypal import paypal_bp
    from financeio.views.relay import relay_bp
    from financeio.views.storage import storage_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(transactions_bp, url_prefix='/api/transactions')
    app.register_blueprint(categories_bp, url_prefix='/api/categories')
    app.register_blueprint(dashboard_bp, url_prefix='/api/dashboard')
    app.register_blueprint(reports_bp, url_prefix='/api/reports')
    app.register_blueprint(stripe_bp, url_prefix='/api')
    app.register_blueprint(paypal_bp, url_prefix='/api/paypal')
    app.register_blueprint(relay_bp, url_prefix='/api')
    app.register_blueprint(storage_bp, url_prefix='/api/storage')

    # CORS ristretto alle origini configurate (ALLOWED_ORIGINS)
    CORS(app, resources={r"/api/*": {"origins": app.config.get('ALLOWED_ORIGINS', [])}}, supports_credentials=True)

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'message': 'Recurso não encontrado'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'message': 'Método não permitido'}), 405

    # Crea le tabelle se il database è SQLite (sviluppo e test)
    db_uri = app.config.get('SQLALCHEMY_DATABASE_URI', '')
    if db_uri.startswith('sqlite:'):
        with app.app_context():
            import financeio.models  # noqa: F401 - registra i modelli
            db.create_all()

    app.logger.info('Finance IO avviata (config=%s)', config_name)
    return app
