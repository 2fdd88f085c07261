import logging
from flask import Blueprint, jsonify, request, current_app

from markup_auditor.dom.registry import RuleRegistry
from markup_auditor.errors import EmptyInputError, InputSourceError

logger = logging.getLogger(__name__)

audit_api_router = Blueprint('audit_api_router', __name__)


# --- HELPER FUNCTION ---

def get_audit_controller():
    """Retrieves the audit controller from the Flask application context."""
    controller = current_app.config.get('AUDIT_CONTROLLER')
    if not controller:
        raise RuntimeError("AuditController is not set in app.config['AUDIT_CONTROLLER']")
    return controller


# --- API ROUTES ---

@audit_api_router.route('/health', methods=['GET'])
def health():
    return jsonify({"status": "ok"})


@audit_api_router.route('/codes', methods=['GET'])
def list_codes():
    """Every issue code the registered rules can produce."""
    RuleRegistry.discover()
    return jsonify({"codes": RuleRegistry.get_all_possible_codes()})


@audit_api_router.route('/audit', methods=['POST'])
def audit():
    """
    Audits markup sent as JSON: {"html": "...", "source": "..."} or {"url": "..."}.
    Form posts with the same field names are accepted too.
    """
    data = request.get_json(silent=True) if request.is_json else request.form
    data = data or {}
    html = data.get('html')
    url = data.get('url')
    source = data.get('source') or "Raw Input"

    try:
        controller = get_audit_controller()
        if url and not html:
            report = controller.audit_url(url)
        else:
            report = controller.audit_markup(html or "", source)
        return jsonify(report.to_dict())

    except (EmptyInputError, InputSourceError) as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        logger.error(f"Error running audit: {e}", exc_info=True)
        return jsonify({"error": "Internal error while running the audit."}), 500
