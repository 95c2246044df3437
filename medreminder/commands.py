import click
from flask_migrate import stamp

from medreminder.extensions import db
from medreminder.seed import seed_reference_data
from medreminder.services.reminder_service import dispatch_due_reminders


def register_commands(app, migrations_dir=None):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables without Alembic, seed reference data and stamp the schema at head."""
        db.create_all()
        seed_reference_data()
        # later upgrades must not try to re-create these tables
        stamp(directory=migrations_dir)
        click.echo("Database initialized.")

    @app.cli.command("send-reminders")
    @click.option("--lead-minutes", type=int, default=None,
                  help="Also remind doses due within this many minutes.")
    def send_reminders(lead_minutes):
        """Notify users of due doses and flag them as reminded."""
        count = dispatch_due_reminders(lead_minutes=lead_minutes)
        click.echo(f"{count} reminder(s) sent.")
