from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify, request

from liff_backend.services.submission import RequestMetadata

main_bp = Blueprint('main', __name__)


@main_bp.route('/')
def health():
    service = current_app.extensions['submission_service']
    return jsonify({
        'status': 'ok',
        'ok': True,
        'message': 'GMF LIFF Backend is running',
        'persistenceEnabled': service.persistence_enabled,
        'monitoringEnabled': bool(current_app.extensions.get('monitoring_enabled')),
        'timestamp': datetime.now(timezone.utc).isoformat(),
    })


@main_bp.route('/liff-submit', methods=['POST'])
def liff_submit():
    service = current_app.extensions['submission_service']
    payload = request.get_json(silent=True)
    metadata = RequestMetadata(
        ip_address=request.remote_addr,
        user_agent=request.headers.get('User-Agent'),
    )
    current_app.logger.info('Received form submission from %s', metadata.ip_address)

    result = service.submit(payload, metadata)
    return jsonify(result.to_payload()), result.status_code
