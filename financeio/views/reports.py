"""
Blueprint per i report finanziari
"""
from flask import Blueprint, jsonify, request, current_app
from flask_login import current_user, login_required

from financeio.exceptions import ReportGenerationError, ReportQuotaExceeded
from financeio.services.reports.report_service import ReportService

reports_bp = Blueprint('reports', __name__)


@reports_bp.route('/', methods=['POST'])
@login_required
def genera():
    data = request.get_json(silent=True) or {}
    timeframe = data.get('timeframe', 'month')
    service = ReportService()
    try:
        report = service.generate(current_user, timeframe)
    except ReportQuotaExceeded as e:
        return jsonify({'message': str(e), 'usage': service.usage(current_user)}), 403
    except ReportGenerationError as e:
        current_app.logger.error('Erro ao gerar relatório: %s', e)
        return jsonify({'message': str(e)}), 502 if service.engine == 'remote' else 400
    return jsonify({'report': report, 'timeframe': timeframe, 'usage': service.usage(current_user)})


@reports_bp.route('/usage', methods=['GET'])
@login_required
def usage():
    return jsonify(ReportService().usage(current_user))
