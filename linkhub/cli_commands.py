"""
Flask CLI commands for operating the service.

Commands:
- flask init-db: Create all tables
- flask edge-config-get KEY: Print an edge config document
- flask edge-config-set KEY JSON: Replace an edge config document
"""
import json

import click

from linkhub.database import create_all
from linkhub.services.edge_config import get_edge_config


def init_cli_commands(app):
    """Register CLI commands with Flask app."""

    @app.cli.command('init-db')
    def init_db_command():
        """Create every table that does not exist yet."""
        create_all()
        click.echo(click.style('✅ Database tables created.', fg='green'))

    @app.cli.command('edge-config-get')
    @click.argument('key')
    def edge_config_get(key):
        """Print the JSON document stored under KEY."""
        edge_config = get_edge_config()
        if not edge_config.is_available():
            click.echo(click.style('❌ Edge config store is not available.', fg='red'))
            raise SystemExit(1)
        click.echo(json.dumps(edge_config.get(key), indent=2))

    @app.cli.command('edge-config-set')
    @click.argument('key')
    @click.argument('value')
    def edge_config_set(key, value):
        """
        Store VALUE (a JSON document) under KEY.

        Example: flask edge-config-set reservedKey '["acme", "admin"]'
        """
        try:
            document = json.loads(value)
        except json.JSONDecodeError as e:
            click.echo(click.style(f'❌ Invalid JSON: {e}', fg='red'))
            raise SystemExit(1)

        if not get_edge_config().set(key, document):
            click.echo(click.style('❌ Edge config store is not available.', fg='red'))
            raise SystemExit(1)
        click.echo(click.style(f"✅ '{key}' updated.", fg='green'))
