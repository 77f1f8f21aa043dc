"""
Blueprint per la dashboard: riepilogo, serie dei grafici e salute finanziaria
"""
from flask import Blueprint, jsonify
from flask_login import current_user, login_required

from financeio.services.dashboard_service import DashboardService

dashboard_bp = Blueprint('dashboard', __name__)


@dashboard_bp.route('/', methods=['GET'])
@login_required
def view():
    return jsonify(DashboardService().overview(current_user.id))


@dashboard_bp.route('/health', methods=['GET'])
@login_required
def health():
    return jsonify(DashboardService().health_overview(current_user.id))
