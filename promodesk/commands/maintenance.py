"""
CLI Commands for housekeeping.

Can be run manually or via cron:

# Drop expired sessions (daily at 3 AM)
0 3 * * * cd /app && flask sessions purge-expired
"""
import click
from flask.cli import with_appcontext
from sqlalchemy import case, func

from ..extensions import db
from ..models.campaign import Campaign, CustomerSubmission
from ..services.session_store import session_store


@click.group('sessions')
def sessions_cli():
    """Session maintenance commands."""
    pass


@sessions_cli.command('purge-expired')
@with_appcontext
def purge_expired_sessions():
    """Delete server-side sessions past their expiry."""
    count = session_store.purge_expired()
    click.echo(f"Purged {count} expired session(s)")


@click.group('campaigns')
def campaigns_cli():
    """Campaign reporting commands."""
    pass


@campaigns_cli.command('stats')
@click.option('--slug', help='Only this campaign')
@with_appcontext
def campaign_stats(slug):
    """Print submission totals per campaign."""
    query = db.session.query(
        Campaign.slug,
        Campaign.is_active,
        func.count(CustomerSubmission.id),
        func.coalesce(func.sum(case((CustomerSubmission.was_valid.is_(True), 1), else_=0)), 0),
    ).outerjoin(CustomerSubmission, CustomerSubmission.campaign_id == Campaign.id).group_by(
        Campaign.id, Campaign.slug, Campaign.is_active
    ).order_by(Campaign.slug)

    if slug:
        query = query.filter(Campaign.slug == slug)

    rows = query.all()
    if not rows:
        click.echo("No campaigns found")
        return

    for campaign_slug, is_active, total, valid in rows:
        state = 'active' if is_active else 'inactive'
        click.echo(f"{campaign_slug} [{state}]: {total} submissions, {valid} valid")
