"""Archivio chiave/valore per utente (equivalente server-side del localStorage)"""
from financeio import db
from datetime import datetime


class KeyValueItem(db.Model):
    __tablename__ = 'kv_store'
    __table_args__ = (db.UniqueConstraint('user_id', 'key', name='uq_kv_store_user_key'),)

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    key = db.Column(db.String(100), nullable=False)
    value = db.Column(db.Text, nullable=True)  # JSON serializzato
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f'<KeyValueItem {self.user_id}:{self.key}>'
