"""Blueprint principale per le route di base"""
from flask import Blueprint, jsonify
from financeio import db
from sqlalchemy import text

main_bp = Blueprint('main', __name__)


@main_bp.route('/')
def index():
    return jsonify({'name': 'Finance IO', 'status': 'ok'})


@main_bp.route('/health')
def health():
    """Probe per il database"""
    try:
        db.session.execute(text('SELECT 1'))
        return jsonify({'status': 'ok'})
    except Exception:
        db.session.rollback()
        return jsonify({'status': 'error'}), 503
