"""
Blueprint per l'autenticazione (registrazione, login, logout, stato Pro)
"""
from flask import Blueprint, jsonify, request, current_app
from flask_login import current_user, login_required, login_user, logout_user

from financeio.services.auth.auth_service import AuthService

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/register', methods=['POST'])
def register():
    data = request.get_json(silent=True) or {}
    ok, msg, user = AuthService().register(data.get('email'), data.get('password'))
    if not ok:
        return jsonify({'message': msg}), 400
    login_user(user)
    return jsonify({'message': msg, 'user': user.to_dict()}), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    data = request.get_json(silent=True) or {}
    user = AuthService().authenticate(data.get('email'), data.get('password'))
    if not user:
        return jsonify({'message': 'E-mail ou senha inválidos'}), 401
    login_user(user, remember=bool(data.get('remember')))
    return jsonify({'message': 'Login realizado com sucesso', 'user': user.to_dict()})


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    logout_user()
    return jsonify({'message': 'Sessão encerrada'})


@auth_bp.route('/me')
@login_required
def me():
    return jsonify({'user': current_user.to_dict()})


@auth_bp.route('/pro-status', methods=['PUT'])
@login_required
def update_pro_status():
    """Downgrade al piano gratuito (l'upgrade passa dai provider di pagamento)"""
    data = request.get_json(silent=True) or {}
    if data.get('is_pro'):
        return jsonify({'message': 'O upgrade é feito pelo checkout de pagamento'}), 400
    ok, msg = AuthService().set_pro_status(current_user.id, False)
    if not ok:
        current_app.logger.error('Erro ao fazer downgrade: %s', msg)
        return jsonify({'message': 'Ocorreu um erro ao processar sua solicitação. Tente novamente.'}), 500
    return jsonify({'message': 'Você voltou para o plano gratuito.', 'user': current_user.to_dict()})
