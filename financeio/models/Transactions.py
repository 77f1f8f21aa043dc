"""Modello per le transazioni"""
from financeio import db


class Transaction(db.Model):
    """Modello per le transazioni finanziarie"""
    __tablename__ = 'transactions'

    id = db.Column(db.Integer, primary_key=True)
    description = db.Column(db.String(200), nullable=False)
    amount = db.Column(db.Float, nullable=False)  # sempre >= 0, il segno è dato da `type`
    type = db.Column(db.String(20), nullable=False)  # 'income' o 'expense'
    # Collegamento "debole" alla categoria: si salva il nome, non l'id
    category = db.Column(db.String(100), nullable=False)
    date = db.Column(db.Date, nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)

    def to_dict(self):
        return {
            'id': self.id,
            'description': self.description,
            'amount': self.amount,
            'type': self.type,
            'category': self.category,
            'date': self.date.isoformat(),
            'user_id': self.user_id,
        }

    def __repr__(self):
        return f'<Transaction {self.description}: {self.amount} ({self.type})>'
