# app.py
"""
Flask wrapper for local development.
- Presents an HTTP route for Slack to hit (via ngrok).
- Converts Flask request objects -> InboundRequest.
- Delegates to core_orbit.
"""

from flask import Flask, request, make_response
from dotenv import load_dotenv

from orbit_intake.config import Settings
from orbit_intake.core_orbit import CommandIntake, InboundRequest, build_intake


def create_app(intake: CommandIntake | None = None) -> Flask:
    """
    'intake' is injectable for tests; otherwise it is built from the
    environment (.env is loaded for local development).
    """
    if intake is None:
        load_dotenv()
        intake = build_intake(Settings.from_env())

    app = Flask(__name__)

    @app.route("/orbit", methods=["POST"])
    def orbit():
        """
        Slash command endpoint for local dev.
        The signature covers the exact bytes Slack sent, so we pass the raw
        body through instead of request.form.
        """
        inbound = InboundRequest(
            body=request.get_data(),
            headers=dict(request.headers),
        )
        status, headers, body = intake.handle(inbound)
        resp = make_response(body, status)
        for k, v in headers.items():
            resp.headers[k] = v
        return resp

    return app


if __name__ == "__main__":
    # Run locally, then expose with ngrok so Slack can reach it.
    create_app().run(port=3000, debug=True)
