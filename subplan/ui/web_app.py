"""
Web application module for the Soccer Substitution Planner.

This module contains the Flask server exposing the planning engine as JSON
API endpoints. Rendering the grid is left to the client.
"""
import logging
import os
from typing import Any, Dict, Optional

from flask import Flask, Response, jsonify, request

from ..models import FormationTemplates, PlanConfigError, PlanFormatError
from ..services import (
    AssignCommand, CascadeMode, ClearPlanCommand, PersistenceService,
    PlanCommandManager, PlanReportService, PlanService, SetPlayersCommand,
    SetTitleCommand, UpdateConfigCommand
)
from ..services.plan_service import PlanAssignmentError
from ..utils.constants import DEFAULT_AUTOSAVE_DIR, DEFAULT_WEB_HOST, DEFAULT_WEB_PORT

logger = logging.getLogger(__name__)

CLIENT_ERRORS = (PlanConfigError, PlanAssignmentError, PlanFormatError, ValueError, TypeError)


class PlanAppState:
    """
    State holder for the web application: one plan plus its edit history.
    """

    def __init__(self, plan_service: Optional[PlanService] = None):
        self.plan_service = plan_service or PlanService()
        self.command_manager = PlanCommandManager()

    def reset(self, plan_service: PlanService) -> None:
        """Replace the plan (e.g. after an import) and drop the edit history."""
        self.plan_service = plan_service
        self.command_manager.clear_history()


def _json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Request body must be a JSON object")
    return data


def _optional_number(data: Dict[str, Any], key: str) -> Optional[float]:
    value = data.get(key)
    if value is None or value == "":
        return None
    return float(value)


def create_app(app_state: Optional[PlanAppState] = None) -> Flask:
    """
    Create and configure the Flask application with API endpoints.

    Args:
        app_state: Optional pre-built state (a fresh default plan otherwise)

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    state = app_state or PlanAppState()
    app.config["PLAN_APP_STATE"] = state
    app.config["AUTOSAVE_DIR"] = os.getenv("SUBPLAN_AUTOSAVE_DIR", DEFAULT_AUTOSAVE_DIR)

    def _plan_response(message: Optional[str] = None, status: int = 200):
        payload = {"success": True, **state.plan_service.summary()}
        payload["can_undo"] = state.command_manager.can_undo()
        payload["can_redo"] = state.command_manager.can_redo()
        if message:
            payload["message"] = message
        return jsonify(payload), status

    def _run(command, message: str):
        state.command_manager.execute_command(command)
        return _plan_response(message)

    @app.errorhandler(PlanConfigError)
    @app.errorhandler(PlanAssignmentError)
    @app.errorhandler(PlanFormatError)
    def handle_client_error(error):
        logger.warning("Rejected request to %s: %s", request.path, error)
        return jsonify({"success": False, "error": str(error)}), 400

    # ==================== API Endpoints ==================== #

    @app.route("/api/plan", methods=["GET"])
    def get_plan():
        """Get the plan with flags, player totals and timeline."""
        return _plan_response()

    @app.route("/api/plan/config", methods=["POST"])
    def update_config():
        """Change half duration, slot interval, minimum minutes or formation."""
        try:
            data = _json_body()
            command = UpdateConfigCommand(
                state.plan_service,
                half_duration_minutes=_optional_number(data, "half_duration_minutes"),
                slot_interval_minutes=_optional_number(data, "slot_interval_minutes"),
                min_minutes_per_player=_optional_number(data, "min_minutes_per_player"),
                formation_id=data.get("formation_id") or None,
            )
            return _run(command, "Configuration updated")
        except CLIENT_ERRORS as e:
            return jsonify({"success": False, "error": str(e)}), 400

    @app.route("/api/plan/players", methods=["POST"])
    def update_players():
        """Replace the roster from a list or newline-separated text."""
        try:
            data = _json_body()
            return _run(SetPlayersCommand(state.plan_service, data.get("players")),
                        "Roster updated")
        except CLIENT_ERRORS as e:
            return jsonify({"success": False, "error": str(e)}), 400

    @app.route("/api/plan/title", methods=["POST"])
    def update_title():
        """Rename the plan."""
        try:
            data = _json_body()
            return _run(SetTitleCommand(state.plan_service, str(data.get("title") or "")),
                        "Title updated")
        except CLIENT_ERRORS as e:
            return jsonify({"success": False, "error": str(e)}), 400

    @app.route("/api/plan/assign", methods=["POST"])
    def assign_player():
        """
        Assign a player to one cell.

        ``cascade`` is ``none``, ``fill`` (empty later slots only) or
        ``overwrite`` (every later slot); the client maps its modifier keys.
        """
        try:
            data = _json_body()
            for field_name in ("position", "half", "time"):
                if data.get(field_name) is None:
                    return jsonify({"success": False, "error": f"'{field_name}' is required"}), 400

            mode = CascadeMode.from_value(data.get("cascade"))
            command = AssignCommand(
                state.plan_service,
                position=data["position"],
                half=data["half"],
                slot_time=data["time"],
                player=str(data.get("player") or ""),
                mode=mode,
            )
            return _run(command, command.description)
        except CLIENT_ERRORS as e:
            return jsonify({"success": False, "error": str(e)}), 400

    @app.route("/api/plan/clear", methods=["POST"])
    def clear_plan():
        """Reset the plan to its defaults (undoable)."""
        return _run(ClearPlanCommand(state.plan_service), "Plan cleared")

    @app.route("/api/undo", methods=["POST"])
    def undo_action():
        """Undo the last edit."""
        if state.command_manager.undo():
            return _plan_response("Action undone")
        return jsonify({"success": False, "message": "Nothing to undo"}), 400

    @app.route("/api/redo", methods=["POST"])
    def redo_action():
        """Redo the next edit."""
        if state.command_manager.redo():
            return _plan_response("Action redone")
        return jsonify({"success": False, "message": "Nothing to redo"}), 400

    @app.route("/api/command-history", methods=["GET"])
    def get_command_history():
        """Get command history for UI display."""
        return jsonify({
            "success": True,
            "history": state.command_manager.get_command_history(),
            "can_undo": state.command_manager.can_undo(),
            "can_redo": state.command_manager.can_redo()
        })

    @app.route("/api/formations", methods=["GET"])
    def get_formations():
        """List the formations a plan can use."""
        return jsonify({
            "success": True,
            "formations": [f.to_dict() for f in FormationTemplates.get_all_templates()],
        })

    # ---------- Save / load / share ---------- #

    @app.route("/api/plan/export", methods=["GET"])
    def export_plan():
        """Return the plan's JSON shape for client-side saving."""
        data = PersistenceService.serialize_plan(state.plan_service.state)
        return jsonify({"success": True, "data": data})

    @app.route("/api/plan/import", methods=["POST"])
    def import_plan():
        """Replace the plan with uploaded JSON."""
        try:
            data = _json_body()
            plan_data = data.get("data")
            if not plan_data:
                return jsonify({"success": False, "error": "No plan data provided"}), 400

            plan_state = PersistenceService.deserialize_plan(plan_data)
            state.reset(PlanService(plan_state))
            return _plan_response("Plan loaded successfully")
        except CLIENT_ERRORS as e:
            return jsonify({"success": False, "error": str(e)}), 400

    @app.route("/api/plan/share", methods=["GET"])
    def share_plan():
        """Pack the plan into a token for a share link."""
        token = PersistenceService.encode_share_token(state.plan_service.state)
        return jsonify({"success": True, "token": token})

    @app.route("/api/plan/share", methods=["POST"])
    def open_shared_plan():
        """Replace the plan with the one packed in a share token."""
        try:
            data = _json_body()
            plan_state = PersistenceService.decode_share_token(str(data.get("token") or ""))
            state.reset(PlanService(plan_state))
            return _plan_response("Shared plan loaded")
        except CLIENT_ERRORS as e:
            return jsonify({"success": False, "error": str(e)}), 400

    @app.route("/api/plan/autosave", methods=["POST"])
    def autosave_plan():
        """Write a timestamped copy of the plan to the autosave directory."""
        file_path = PersistenceService.auto_save(state.plan_service.state,
                                                 app.config["AUTOSAVE_DIR"])
        if file_path is None:
            return jsonify({"success": False, "error": "Auto-save failed"}), 500
        return jsonify({"success": True, "file": os.path.basename(file_path)})

    @app.route("/api/plan/saves", methods=["GET"])
    def list_saves():
        """List autosaved plans, newest first."""
        saves = PersistenceService.get_recent_saves(app.config["AUTOSAVE_DIR"])
        return jsonify({
            "success": True,
            "saves": [{"file": name, "modified": mtime} for name, mtime in saves],
        })

    @app.route("/api/plan/saves/<filename>", methods=["POST"])
    def load_save(filename):
        """Replace the plan with an autosaved one."""
        try:
            plan_state = PersistenceService.load_saved_plan(app.config["AUTOSAVE_DIR"], filename)
        except FileNotFoundError:
            return jsonify({"success": False, "error": f"No saved plan named {filename}"}), 404
        except CLIENT_ERRORS as e:
            return jsonify({"success": False, "error": str(e)}), 400
        state.reset(PlanService(plan_state))
        return _plan_response("Saved plan loaded")

    # ---------- Reports ---------- #

    @app.route("/api/report/csv", methods=["GET"])
    def export_report_csv():
        """Export playing time totals as CSV."""
        try:
            report_service = PlanReportService(state.plan_service.state)
            csv_content = report_service.generate_report_csv(state.plan_service.evaluate())
        except ValueError as e:
            return jsonify({"success": False, "error": str(e)}), 400

        return Response(
            csv_content,
            mimetype="text/csv",
            headers={"Content-Disposition": "attachment; filename=substitution_plan.csv"},
        )

    @app.route("/api/report/timeline", methods=["GET"])
    def export_timeline_text():
        """Export the substitution timeline as plain text."""
        report_service = PlanReportService(state.plan_service.state)
        return Response(report_service.generate_timeline_text(), mimetype="text/plain")

    return app


def run_web_app(host: str = DEFAULT_WEB_HOST, port: int = DEFAULT_WEB_PORT) -> None:
    """
    Run the web application.

    Args:
        host: Host address to bind to (default: localhost only)
        port: Port number to listen on
    """
    app = create_app()
    logger.info("Starting substitution planner on http://%s:%s", host, port)
    app.run(host=host, port=port, debug=False)
