"""Flask JSON API for project issues."""

import logging
from typing import Any, Optional

from flask import Blueprint, Flask, current_app, jsonify, request

from issuetracker.config import ServerConfig
from issuetracker.errors import IssueTrackerError
from issuetracker.repository import IssueRepository
from issuetracker.store import IssueStore

logger = logging.getLogger(__name__)

EXTENSION_KEY = "issuetracker"

api = Blueprint("api", __name__, url_prefix="/api")


def get_repo() -> IssueRepository:
    """Get the repository bound to the current application."""
    repo: IssueRepository = current_app.extensions[EXTENSION_KEY]
    return repo


def _request_data() -> dict[str, Any]:
    """Read the request body as a dict from JSON or form data.

    A malformed or non-object JSON body reads as empty.
    """
    if request.is_json:
        data = request.get_json(silent=True)
        return dict(data) if isinstance(data, dict) else {}
    return request.form.to_dict()


def handle_tracker_error(error: IssueTrackerError) -> Any:
    """Report a rejected request as a JSON error body with status 200."""
    return jsonify(error.to_dict()), 200


# =============================================================================
# API Routes
# =============================================================================


@api.route("/issues/<project>", methods=["GET"])
def api_list_issues(project: str) -> Any:
    """API: List a project's issues, filtered by the query string."""
    repo = get_repo()
    issues = repo.list_issues(project, request.args.to_dict())
    return jsonify([i.to_dict() for i in issues])


@api.route("/issues/<project>", methods=["POST"])
def api_create_issue(project: str) -> Any:
    """API: Create a new issue."""
    repo = get_repo()
    created = repo.create_issue(project, _request_data())
    return jsonify(created.to_dict())


@api.route("/issues/<project>", methods=["PUT"])
def api_update_issue(project: str) -> Any:
    """API: Update an issue."""
    repo = get_repo()
    data = _request_data()
    issue_id = data.pop("_id", None)

    repo.update_issue(project, issue_id, data)
    return jsonify({"result": "successfully updated", "_id": issue_id})


@api.route("/issues/<project>", methods=["DELETE"])
def api_delete_issue(project: str) -> Any:
    """API: Delete an issue."""
    repo = get_repo()
    data = _request_data()
    issue_id = data.get("_id") or request.args.get("_id")

    repo.delete_issue(project, issue_id)
    return jsonify({"result": "successfully deleted", "_id": issue_id})


def create_app(store: Optional[IssueStore] = None) -> Flask:
    """Create the Flask application.

    Args:
        store: Store the API serves. The caller owns its lifecycle; a new
            empty store is used if not provided.

    Returns:
        Configured Flask application.
    """
    app = Flask(__name__)
    app.json.sort_keys = False  # type: ignore[attr-defined]
    app.extensions[EXTENSION_KEY] = IssueRepository(store)
    app.register_blueprint(api)
    app.register_error_handler(IssueTrackerError, handle_tracker_error)
    return app


def run_server(
    config: Optional[ServerConfig] = None,
    store: Optional[IssueStore] = None,
) -> None:
    """Run the web server.

    Args:
        config: Server settings. Read from the environment if not provided.
        store: Store to serve. A new empty store is used if not provided.
    """
    config = config or ServerConfig.from_env()
    app = create_app(store)
    host, port = config.host, config.port

    if config.debug:
        logger.info("Starting issue tracker API on http://%s:%s (DEBUG mode with Flask)", host, port)
        app.run(host=host, port=port, debug=True)
    else:
        try:
            from waitress import serve  # type: ignore

            logger.info(
                "Starting issue tracker API on http://%s:%s (Production mode with Waitress, %d threads)",
                host,
                port,
                config.threads,
            )
            serve(app, host=host, port=port, threads=config.threads)
        except ImportError:
            logger.warning("'waitress' not found. Falling back to Flask development server.")
            logger.warning("Install with: pip install issuetracker[web]")
            logger.info("Starting issue tracker API on http://%s:%s (Development mode with Flask)", host, port)
            app.run(host=host, port=port, debug=False)


if __name__ == "__main__":
    run_server(ServerConfig.from_env().override(debug=True))
