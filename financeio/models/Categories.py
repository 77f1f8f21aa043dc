"""Modello per le categorie di transazioni"""
from financeio import db


class Category(db.Model):
    """Categoria personalizzabile per utente"""
    __tablename__ = 'categories'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    type = db.Column(db.String(20), nullable=False)  # 'income' o 'expense'
    is_default = db.Column(db.Boolean, nullable=False, default=False)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'type': self.type,
            'isDefault': bool(self.is_default),
        }

    def __repr__(self):
        return f'<Category {self.name} ({self.type})>'
