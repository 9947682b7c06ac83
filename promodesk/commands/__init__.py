"""
CLI Commands for PromoDesk.

Usage:
    flask sessions purge-expired     # Delete expired server-side sessions
    flask campaigns stats            # Submission totals per campaign
"""
from .maintenance import sessions_cli, campaigns_cli


def init_app(app):
    """Register all CLI commands with the Flask app."""
    app.cli.add_command(sessions_cli)
    app.cli.add_command(campaigns_cli)
