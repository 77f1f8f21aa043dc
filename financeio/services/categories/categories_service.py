"""
Servizio per la gestione delle categorie
"""
import logging

from financeio.services import BaseService
from financeio.models.Categories import Category
from financeio.defaults import DEFAULT_CATEGORIES, TRANSACTION_TYPES

logger = logging.getLogger(__name__)


class CategoriesService(BaseService):
    """Servizio per la gestione delle categorie dell'utente"""

    def ensure_defaults(self, user_id):
        """Semina le categorie predefinite se l'utente non ne ha ancora"""
        if Category.query.filter_by(user_id=user_id).count() > 0:
            return False
        for name, type_ in DEFAULT_CATEGORIES:
            self.db.session.add(Category(user_id=user_id, name=name, type=type_, is_default=True))
        try:
            self.db.session.commit()
        except Exception:
            self.db.session.rollback()
            logger.exception('Errore nella creazione delle categorie predefinite per utente %s', user_id)
            raise
        return True

    def get_all_categories(self, user_id, type_filter=None):
        """Recupera tutte le categorie dell'utente (opzionalmente per tipo)"""
        self.ensure_defaults(user_id)
        query = Category.query.filter_by(user_id=user_id)
        if type_filter in TRANSACTION_TYPES:
            query = query.filter(Category.type == type_filter)
        return query.order_by(Category.type, Category.id).all()

    def find_duplicate(self, user_id, name, type_, exclude_id=None):
        """Categoria con lo stesso nome (case-insensitive) e tipo, se esiste.

        Il confronto avviene in Python: lower() di SQLite non gestisce i
        caratteri accentati (es. "SAÚDE").
        """
        wanted = name.strip().casefold()
        for category in Category.query.filter_by(user_id=user_id, type=type_).all():
            if category.id != exclude_id and category.name.casefold() == wanted:
                return category
        return None

    def create_category(self, user_id, name, type_):
        """Crea una nuova categoria"""
        name = (name or '').strip()
        if not name:
            return False, "O nome da categoria não pode estar vazio.", None
        if type_ not in TRANSACTION_TYPES:
            return False, "Tipo de categoria inválido.", None

        self.ensure_defaults(user_id)
        if self.find_duplicate(user_id, name, type_):
            return False, "Já existe uma categoria com este nome.", None

        category = Category(user_id=user_id, name=name, type=type_, is_default=False)
        success, message = self.save(category)
        if not success:
            return False, message, None
        return True, "Categoria adicionada com sucesso!", category

    def rename_category(self, user_id, category_id, name):
        """Rinomina una categoria esistente"""
        category = Category.query.filter_by(id=category_id, user_id=user_id).first()
        if not category:
            return False, "Categoria não encontrada", None

        name = (name or '').strip()
        if not name:
            return False, "O nome da categoria não pode estar vazio.", None
        if self.find_duplicate(user_id, name, category.type, exclude_id=category.id):
            return False, "Já existe uma categoria com este nome.", None

        success, message = self.update(category, name=name)
        if not success:
            return False, message, None
        return True, "Categoria atualizada com sucesso!", category

    def delete_category(self, user_id, category_id):
        """Elimina una categoria (anche se predefinita)"""
        category = Category.query.filter_by(id=category_id, user_id=user_id).first()
        if not category:
            return False, "Categoria não encontrada"
        success, message = self.delete(category)
        if not success:
            return False, message
        return True, "Categoria excluída com sucesso!"
