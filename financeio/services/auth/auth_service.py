"""Servizio per registrazione, autenticazione e stato Pro degli utenti"""
import logging

from financeio import db
from financeio.models.User import User
from financeio.services import BaseService
from financeio.services.categories.categories_service import CategoriesService

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class AuthService(BaseService):

    def get_user(self, user_id):
        return db.session.get(User, user_id)

    def get_by_email(self, email):
        return User.query.filter_by(email=(email or '').strip().lower()).first()

    def register(self, email, password):
        email = (email or '').strip().lower()
        if not email or '@' not in email:
            return False, "E-mail inválido", None
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            return False, f"A senha deve ter pelo menos {MIN_PASSWORD_LENGTH} caracteres", None
        if self.get_by_email(email):
            return False, "Este e-mail já está cadastrado", None

        user = User(email=email)
        user.set_password(password)
        success, message = self.save(user)
        if not success:
            return False, message, None

        CategoriesService().ensure_defaults(user.id)
        logger.info('Nuovo utente registrato: %s', user.id)
        return True, "Conta criada com sucesso!", user

    def authenticate(self, email, password):
        user = self.get_by_email(email)
        if user and user.check_password(password or ''):
            return user
        return None

    def set_pro_status(self, user_id, is_pro):
        """Aggiorna il flag `is_pro`; restituisce (success, message)"""
        user = self.get_user(user_id)
        if not user:
            logger.error('set_pro_status: utente %s non trovato', user_id)
            return False, "Usuário não encontrado"
        success, message = self.update(user, is_pro=bool(is_pro))
        if success:
            logger.info('Stato Pro dell\'utente %s impostato a %s', user_id, bool(is_pro))
        return success, message
