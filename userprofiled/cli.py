"""userprofile CLI.

Offline commands to check a profile configuration document and inspect the
metadata it compiles to, without a running server.
"""

import json
import sys
from pathlib import Path

import click

from userprofile_library.config import load_settings
from userprofile_library.errors import ConfigurationParseError
from userprofile_library.errors import ConfigurationValidationError
from userprofile_library.errors import ProfileError
from userprofile_library.models.config import parse_config
from userprofile_library.services.provider_factory import ProfileProviderFactory


def _read_document(path: Path) -> str:
    return path.read_text(encoding="utf-8")


@click.group()
def cli():
    """Declarative user profile tools."""


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def validate(file: Path):
    """Check a profile configuration document."""
    factory = ProfileProviderFactory()
    try:
        config = parse_config(_read_document(file))
    except ConfigurationParseError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    errors = factory.compiler.validator.validate(config)
    if errors:
        click.echo(f"{file}: {len(errors)} problem(s) found", err=True)
        for error in errors:
            click.echo(f"  {error}", err=True)
        sys.exit(1)

    click.echo(f"{file}: valid ({len(config.attributes)} attributes, {len(config.groups)} groups)")


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--context", "context_id", required=True, help="Context to compile for")
@click.option("--realm", default=None, help="Realm name (default: the configured default realm)")
@click.option(
    "--identifier-from-contact",
    is_flag=True,
    help="Realm derives usernames from email addresses",
)
def compile(file: Path, context_id: str, realm: str | None, identifier_from_contact: bool):
    """Compile a document for one context and print the metadata as JSON."""
    if realm is None:
        realm = load_settings().default_realm
    factory = ProfileProviderFactory(identifier_synthesized_from_contact=identifier_from_contact)
    provider = factory.create(realm)
    try:
        provider.set_configuration(_read_document(file))
        metadata = provider.get_compiled(context_id)
    except ConfigurationValidationError as e:
        click.echo(f"{file}: {len(e.errors)} problem(s) found", err=True)
        for error in e.errors:
            click.echo(f"  {error}", err=True)
        sys.exit(1)
    except ProfileError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(json.dumps(metadata.to_dict(), indent=2))


@cli.command()
def contexts():
    """List profile contexts and their capabilities."""
    catalog = ProfileProviderFactory().catalog
    for context_id in catalog.context_ids():
        descriptor = catalog.get(context_id)
        flow = "auth-flow" if descriptor.can_originate_from_auth_flow else "-"
        supported = ",".join(sorted(descriptor.supported_attributes)) if descriptor.supported_attributes else "*"
        click.echo(f"{context_id:<16} {flow:<10} roles={','.join(sorted(descriptor.roles))} attributes={supported}")


def main():
    """Entry point for userprofile CLI."""
    try:
        cli()
    except KeyboardInterrupt:
        click.echo("\nInterrupted")
        sys.exit(0)


if __name__ == "__main__":
    main()
