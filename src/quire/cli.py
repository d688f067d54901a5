"""CLI main entry point."""

import json
import logging
from pathlib import Path

import click

from .config import Config
from .content import Connection
from .db import close_db, create_tables, create_user, init_db
from .enums import Scope
from .errors import ConfigException, QuireException
from .i18n import initialize
from .log import setup as setup_log
from .native import is_native
from .resolver import SchemaResolver
from .schema import Schema
from .stores.db import DBConnectionStore, DBContentStore, DBSchemaStore
from .utils import new_id, sanitize

logger = logging.getLogger(__name__)


def load_config(ctx) -> Config:
    config_path = ctx.obj["config_path"]
    logger.info(f"Loading configuration file: {config_path}")
    cfg = Config.load_from_file(config_path)
    setup_log(cfg.log_file, debug=cfg.web.debug)
    initialize(ui_language=cfg.language)
    return cfg


def open_db(cfg: Config) -> None:
    init_db(cfg.database_path)
    create_tables()


def project_environment(cfg: Config, project: str | None, environment: str | None) -> tuple[str, str]:
    """Pick a configured project environment, defaulting to the first project."""
    if not cfg.projects:
        raise ConfigException("No projects are configured")

    project_config = cfg.get_project(project) if project else cfg.projects[0]
    if project_config is None:
        raise ConfigException(f"Project \"{project}\" not found")

    environment = environment or project_config.default_environment
    if environment not in project_config.environments:
        raise ConfigException(
            f"Environment \"{environment}\" not found in project \"{project_config.name}\""
        )
    return project_config.name, environment


def read_schema_files(path: Path) -> list[dict]:
    """Read schema documents from a JSON file or a directory of JSON files.

    A file may hold one schema object or a list of them. Files without an
    ``id`` use their stem.
    """
    files = sorted(path.glob("*.json")) if path.is_dir() else [path]
    schemas = []
    for file in files:
        try:
            data = json.loads(file.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise QuireException(f"Failed to read schema file {file}: {e}") from e

        for item in data if isinstance(data, list) else [data]:
            if not isinstance(item, dict):
                raise QuireException(f"Schema file {file} holds a non-object entry")
            item.setdefault("id", file.stem)
            schemas.append(item)
    return schemas


project_option = click.option("--project", "-P", default=None, help="Project name")
environment_option = click.option("--environment", "-e", default=None, help="Environment name")


@click.group()
@click.option("--config", "-c", default="config.toml", help="Configuration file path")
@click.pass_context
def cli(ctx, config: str):
    """Quire - schema-driven content editing service."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config
    setup_log()


@cli.command(name="init-db")
@click.pass_context
def init_database(ctx):
    """Create the database tables."""
    try:
        cfg = load_config(ctx)
        open_db(cfg)
        click.echo(f"Database initialized: {cfg.database_path}")
    except QuireException as e:
        logger.error(f"Application error: {e}")
        raise click.ClickException(str(e))
    finally:
        close_db()


@cli.command(name="create-user")
@click.argument("username")
@click.option("--token", default=None, help="API token, generated when omitted")
@click.option("--admin", is_flag=True, default=False, help="Grant every scope")
@click.option(
    "--scope",
    "scopes",
    multiple=True,
    help="Scope in a project, as PROJECT:SCOPE. Repeatable.",
)
@click.pass_context
def create_user_command(ctx, username: str, token: str | None, admin: bool, scopes: tuple[str, ...]):
    """Create a user, or update an existing one."""
    valid_scopes = {scope.value for scope in Scope}
    scope_map: dict[str, list[str]] = {}
    for item in scopes:
        project, _, scope = item.partition(":")
        if not project or scope not in valid_scopes:
            raise click.BadParameter(
                f"Expected PROJECT:SCOPE with scope one of {', '.join(sorted(valid_scopes))}",
                param_hint="--scope",
            )
        scope_map.setdefault(project, []).append(scope)

    token = token or new_id()
    try:
        cfg = load_config(ctx)
        open_db(cfg)
        create_user(username, token=token, is_admin=admin, scopes=scope_map)
        logger.info(f"User {username} saved with token {sanitize(token)}")
        click.echo(token)
    except QuireException as e:
        logger.error(f"Application error: {e}")
        raise click.ClickException(str(e))
    finally:
        close_db()


@cli.command(name="import-schemas")
@click.argument("path", type=click.Path(exists=True, path_type=Path))
@project_option
@environment_option
@click.pass_context
def import_schemas(ctx, path: Path, project: str | None, environment: str | None):
    """Import schemas from a JSON file or a directory of JSON files."""
    try:
        cfg = load_config(ctx)
        project, environment = project_environment(cfg, project, environment)
        open_db(cfg)

        store = DBSchemaStore(project, environment)
        imported = []
        for data in read_schema_files(path):
            if is_native(data["id"]):
                logger.warning(f"Skipping native schema \"{data['id']}\"")
                continue
            schema = Schema.model_validate(data)
            store.save(schema)
            imported.append(schema.id)

        resolver = SchemaResolver(store)
        for schema_id in imported:
            try:
                resolver.resolve(schema_id)
            except QuireException as e:
                click.echo(f"Warning: {schema_id}: {e}", err=True)

        click.echo(f"Imported {len(imported)} schemas into {project}/{environment}")
    except QuireException as e:
        logger.error(f"Application error: {e}")
        raise click.ClickException(str(e))
    except ValueError as e:
        raise click.ClickException(f"Invalid schema: {e}")
    finally:
        close_db()


@cli.command(name="resolve-schema")
@click.argument("schema_id")
@project_option
@environment_option
@click.pass_context
def resolve_schema(ctx, schema_id: str, project: str | None, environment: str | None):
    """Print a schema merged with all of its parents."""
    try:
        cfg = load_config(ctx)
        project, environment = project_environment(cfg, project, environment)
        open_db(cfg)

        resolver = SchemaResolver(
            DBSchemaStore(project, environment),
            DBContentStore(project, environment),
        )
        merged = resolver.resolve(schema_id)
        click.echo(json.dumps(merged.to_dict(), indent=2, ensure_ascii=False))
    except QuireException as e:
        logger.error(f"Application error: {e}")
        raise click.ClickException(str(e))
    finally:
        close_db()


@cli.command(name="add-connection")
@click.argument("url")
@click.option("--id", "connection_id", default=None, help="Connection id, generated when omitted")
@click.option("--title", default=None, help="Display title")
@project_option
@environment_option
@click.pass_context
def add_connection(
    ctx,
    url: str,
    connection_id: str | None,
    title: str | None,
    project: str | None,
    environment: str | None,
):
    """Add a publishing connection."""
    try:
        cfg = load_config(ctx)
        project, environment = project_environment(cfg, project, environment)
        open_db(cfg)

        connection = Connection(id=connection_id or new_id(), title=title or url, url=url)
        DBConnectionStore(project, environment).save(connection)
        click.echo(connection.id)
    except QuireException as e:
        logger.error(f"Application error: {e}")
        raise click.ClickException(str(e))
    finally:
        close_db()


@cli.command(name="serve")
@click.option("--host", "-h", default=None, help="Override host from config")
@click.option("--port", "-p", default=None, type=int, help="Override port from config")
@click.pass_context
def serve(ctx, host, port):
    """Start the API server."""
    import uvicorn

    from .api import create_app

    try:
        cfg = load_config(ctx)

        host = host or cfg.web.host
        port = port or cfg.web.port

        if cfg.web.debug:
            logger.warning("Debug mode is enabled. This should NOT be used in production.")

        app = create_app(cfg)

        logger.info(f"Starting server on {host}:{port}")
        uvicorn.run(app, host=host, port=port, log_level="debug" if cfg.web.debug else "info")
    except QuireException as e:
        logger.error(f"Application error: {e}", exc_info=True)
        raise click.ClickException(str(e))


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
