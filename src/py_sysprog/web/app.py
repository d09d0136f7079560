"""Flask application factory for the py-sysprog web UI.

The ``create_app`` function creates a shell and returns a Flask app
with four endpoints:

- ``GET /`` — render the terminal HTML page.
- ``GET /api/programs`` — list the batch report names.
- ``GET /api/run/<program>`` — run one batch report and return JSON.
- ``POST /api/execute`` — execute a shell command and return JSON.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from flask import Flask, Response, jsonify, render_template, request

from py_sysprog import reports
from py_sysprog.shell import Shell

if TYPE_CHECKING:
    from collections.abc import Callable

_HTTP_BAD_REQUEST = 400
_HTTP_NOT_FOUND = 404

PROGRAMS: dict[str, Callable[[], str]] = {
    "paging": reports.paging_report,
    "scheduling": reports.scheduling_report,
    "macro": reports.macro_report,
    "assembler": reports.assembler_report,
}


def create_app() -> Flask:
    """Create and configure the Flask application.

    Returns:
        A configured Flask application ready to serve.

    """
    shell = Shell()

    app = Flask(__name__)

    @app.route("/")
    def index() -> str:  # pyright: ignore[reportUnusedFunction]
        """Render the terminal HTML page."""
        return render_template("index.html", programs=list(PROGRAMS))

    @app.route("/api/programs")
    def programs() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the names of the batch reports."""
        return jsonify({"programs": list(PROGRAMS)})

    @app.route("/api/run/<program>")
    def run(program: str) -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Run one batch report on the built-in sample.

        Returns:
            JSON with ``program`` and ``output`` fields.

        """
        report = PROGRAMS.get(program)
        if report is None:
            return jsonify({"error": f"Unknown program: {program}"}), _HTTP_NOT_FOUND
        return jsonify({"program": program, "output": report()})

    @app.route("/api/execute", methods=["POST"])
    def execute() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Execute a shell command and return JSON output.

        Expects JSON body: ``{"command": "..."}``

        Returns:
            JSON with ``output`` and ``exited`` fields.

        """
        data = request.get_json(silent=True)
        if data is None or "command" not in data:
            return jsonify({"error": "Missing 'command' field"}), _HTTP_BAD_REQUEST

        command: str = data["command"]
        result = shell.execute(command)

        if result == Shell.EXIT_SENTINEL:
            return jsonify({"output": "Goodbye.", "exited": True})
        return jsonify({"output": result, "exited": False})

    return app


def main() -> None:
    """Run the web UI development server.

    This is the ``py-sysprog-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
