import logging
import re
import uuid

from flask import Blueprint, g, jsonify, make_response, redirect, render_template_string, request, url_for

from ..errors import StoreError
from .registry import WorkflowRegistry

logger = logging.getLogger(__name__)

CLIENT_COOKIE = "cid"
THEME_COOKIE = "theme"
COOKIE_MAX_AGE = 60 * 60 * 24 * 365 * 3  # 3-year cookie
THEMES = ("dark", "light")

_CLIENT_ID_RE = re.compile(r"^[0-9a-f]{32}$")

SUBMIT_STATUS = {
    None: 200,
    "invalid": 400,
    "busy": 409,
    "quota_exhausted": 429,
    "network_error": 502,
}


def create_submission_routes(registry: WorkflowRegistry, index_template: str, default_theme: str = "dark") -> Blueprint:
    """Create Flask routes for the submission form and its JSON API."""

    submission_bp = Blueprint('submission', __name__)

    def _client_id() -> str:
        """Client scope from the cookie, issuing a fresh one if missing or malformed."""
        cid = getattr(g, "client_id", None)
        if cid:
            return cid
        cid = request.cookies.get(CLIENT_COOKIE, "")
        if not _CLIENT_ID_RE.match(cid):
            cid = uuid.uuid4().hex
            g.new_client_id = True
        g.client_id = cid
        return cid

    def _workflow():
        cid = _client_id()
        # A read from a client that never returned its cookie keeps no state
        if getattr(g, "new_client_id", False) and request.method == "GET":
            return registry.transient(cid)
        return registry.get(cid)

    def _theme() -> str:
        theme = request.cookies.get(THEME_COOKIE, default_theme)
        return theme if theme in THEMES else default_theme

    @submission_bp.after_request
    def _issue_client_cookie(response):
        if getattr(g, "new_client_id", False):
            response.set_cookie(CLIENT_COOKIE, g.client_id, max_age=COOKIE_MAX_AGE, httponly=True, samesite="Lax")
        return response

    @submission_bp.errorhandler(StoreError)
    def _store_unavailable(e):
        logger.error(f"Client storage unavailable: {e}")
        return jsonify({
            "success": False,
            "reason": "storage_error",
            "message": "Stored chances could not be read. Please try again later."
        }), 503

    @submission_bp.route("/", methods=["GET"])
    def index():
        """Render the form, remaining chances and the current list."""
        state = _workflow().snapshot()
        return render_template_string(index_template, state=state, theme=_theme())

    @submission_bp.route("/submit", methods=["POST"])
    def submit_form():
        """Handle the HTML form post."""
        workflow = _workflow()
        workflow.set_fields(
            name=request.form.get("name", ""),
            username=request.form.get("username", "")
        )
        workflow.submit()
        return redirect(url_for("submission.index"))

    @submission_bp.route("/refresh", methods=["POST"])
    def refresh_form():
        """Manual refresh from the HTML page."""
        _workflow().refresh()
        return redirect(url_for("submission.index"))

    @submission_bp.route("/theme", methods=["POST"])
    def toggle_theme():
        """Switch between dark and light mode."""
        new_theme = "light" if _theme() == "dark" else "dark"
        resp = make_response(redirect(url_for("submission.index")))
        resp.set_cookie(THEME_COOKIE, new_theme, max_age=COOKIE_MAX_AGE)
        return resp

    @submission_bp.route("/api/state", methods=["GET"])
    def get_state():
        """Current workflow state."""
        return jsonify(_workflow().snapshot())

    @submission_bp.route("/api/fields", methods=["POST"])
    def update_fields():
        """Field-change event."""
        data = request.get_json(silent=True) or {}
        workflow = _workflow()
        workflow.set_fields(name=data.get("name"), username=data.get("username"))
        return jsonify(workflow.snapshot())

    @submission_bp.route("/api/submit", methods=["POST"])
    def submit_api():
        """Submit event; fields in the body are applied first."""
        data = request.get_json(silent=True) or {}
        workflow = _workflow()
        workflow.set_fields(name=data.get("name"), username=data.get("username"))

        result = workflow.submit()
        body = result.to_dict()
        body["state"] = workflow.snapshot()
        return jsonify(body), SUBMIT_STATUS.get(result.reason, 500)

    @submission_bp.route("/api/refresh", methods=["POST"])
    def refresh_api():
        """Manual refresh trigger."""
        workflow = _workflow()
        ok = workflow.refresh()
        return jsonify({"success": ok, "state": workflow.snapshot()})

    return submission_bp
