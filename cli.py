# cli.py
import sys

import click

import client
from log_setup import setup_logging
from main_server import serve
from server_config import ConfigError, load_server_config


@click.group()
def main():
    """Course registration over SOAP: enroll, list rosters, run the server."""


# ---------------------------------------------------
# Client commands
# ---------------------------------------------------
@main.command()
@click.argument("host_port", metavar="HOSTPORT")
@click.argument("course")
@click.argument("student_id", metavar="STUDENTID", type=int)
@click.argument("name")
def register(host_port, course, student_id, name):
    """Request an add code for COURSE and register STUDENTID with it."""
    client.register(host_port, course, student_id, name)


@main.command("list-students")
@click.argument("host_port", metavar="HOSTPORT")
@click.argument("course")
def list_students(host_port, course):
    """List the roster, sorted by student ID."""
    client.list_students(host_port, course)


# camelCase spelling kept for existing scripts
main.add_command(list_students, "listStudents")


# ---------------------------------------------------
# Server command
# ---------------------------------------------------
@main.command()
@click.argument("port", type=click.IntRange(0, 65535), required=False)
@click.option("--host", default=None, help="Bind address (default: HOST from config)")
@click.option("-c", "--config", "config_path", type=click.Path(dir_okay=False), default=None,
              help="Path to server.properties (default: $COURSEREG_CONFIG or ./server.properties)")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def server(port, host, config_path, verbose):
    """Serve the registration, utility and add services on PORT (default: PORT from config)."""
    try:
        config = load_server_config(config_path)
    except (ConfigError, OSError) as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(2)

    setup_logging("DEBUG" if verbose else config.log_level)
    sys.exit(serve(port, config, host=host))


if __name__ == "__main__":
    main()
