from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import click

from schemaform.form import JsonSchemaForm, ValueHolder, collect_errors
from schemaform.schema import UNSET, SchemaConfigError, load_schema, to_plain

logger = logging.getLogger(__name__)


def _read_json(path: str) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding='utf8'))
    except OSError as e:
        raise click.ClickException(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise click.ClickException(f"{path} is not valid JSON: {e}") from e


def _load_schema_file(path: str):
    try:
        return load_schema(_read_json(path))
    except SchemaConfigError as e:
        raise click.ClickException(f"Invalid schema: {e}") from e


def _print_errors(errors: dict[str, str]) -> None:
    for key, message in errors.items():
        click.echo(f"  {click.style(key or '(root)', fg='cyan')}: {click.style(message, fg='yellow')}", err=True)


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--quiet', '-q', is_flag=True, help='Suppress most output')
@click.pass_context
def cli(ctx, verbose: bool, quiet: bool):
    """schemaform CLI: render, validate and edit values through a JSON schema form."""
    from schemaform.utils.logging_config import setup_cli_logging

    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose
    ctx.obj['quiet'] = quiet

    setup_cli_logging(verbose=verbose, quiet=quiet)


def main():
    cli()


@cli.command('render')
@click.argument('schema_path', type=click.Path(exists=True, dir_okay=False))
@click.option('--value', 'value_path', type=click.Path(exists=True, dir_okay=False), default=None,
              help='JSON file with the current value (optional)')
@click.option('--name', default='form', help='Form name, used as the label fallback')
def render_cmd(schema_path: str, value_path: Optional[str], name: str):
    """Render the form for SCHEMA_PATH as a standalone HTML page."""
    from schemaform.widgets.html import HtmlKit, render_page

    schema = _load_schema_file(schema_path)
    value = _read_json(value_path) if value_path else UNSET
    form = JsonSchemaForm(name, schema, value, kit=HtmlKit())
    try:
        body = form.render()
    except SchemaConfigError as e:
        raise click.ClickException(f"Invalid schema: {e}") from e
    logger.debug(f"Rendered form with {len(form.errors)} field error(s)")
    click.echo(render_page(schema.title or name, body or ''))


@cli.command('validate')
@click.argument('schema_path', type=click.Path(exists=True, dir_okay=False))
@click.argument('value_path', type=click.Path(exists=True, dir_okay=False))
@click.option('--json', 'as_json', is_flag=True, help='Output as JSON')
def validate_cmd(schema_path: str, value_path: str, as_json: bool):
    """Show the first error of every field. Exits with status 1 if any field is invalid."""
    schema = _load_schema_file(schema_path)
    try:
        errors = collect_errors(schema, _read_json(value_path))
    except SchemaConfigError as e:
        raise click.ClickException(f"Invalid schema: {e}") from e

    if as_json:
        click.echo(json.dumps({'valid': not errors, 'errors': errors}, indent=2, sort_keys=True))
    elif errors:
        click.echo(f"{len(errors)} field(s) invalid:")
        for key, message in errors.items():
            click.echo(f"  {click.style(key or '(root)', fg='cyan')}: {click.style(message, fg='yellow')}")
    else:
        click.echo(click.style('OK', fg='green'))

    if errors:
        raise SystemExit(1)


def _removal_order(path: str) -> tuple:
    # remove higher indices first so earlier removals don't shift later ones
    parent, _, last = path.rpartition('.')
    return (parent, -int(last) if last.isdigit() else 0)


@cli.command('edit')
@click.argument('schema_path', type=click.Path(exists=True, dir_okay=False))
@click.argument('value_path', type=click.Path(exists=True, dir_okay=False))
@click.option('--set', 'sets', multiple=True, metavar='PATH=TEXT', help='Type TEXT into the field at PATH')
@click.option('--toggle', 'toggles', multiple=True, metavar='PATH', help='Toggle the checkbox at PATH')
@click.option('--append', 'appends', multiple=True, metavar='PATH', help='Append an empty item to the array at PATH')
@click.option('--remove', 'removes', multiple=True, metavar='PATH', help='Remove the array item at PATH (e.g. tags.0)')
@click.option('--in-place', is_flag=True, help='Write the result back to VALUE_PATH')
@click.option('--json', 'as_json', is_flag=True, help='Print value and errors as one JSON object')
def edit_cmd(schema_path: str, value_path: str, sets: tuple, toggles: tuple, appends: tuple,
             removes: tuple, in_place: bool, as_json: bool):
    """Apply edits to a value through the form's own widgets and print the result.

    Field paths are dot-separated below the root, e.g. profile.bio or tags.0.
    Appends run first, then sets, toggles and finally removals.
    """
    schema = _load_schema_file(schema_path)
    holder = ValueHolder(_read_json(value_path))
    form = JsonSchemaForm('value', schema, holder.value, holder, delay=0.0)

    actions: list[tuple[str, str, Optional[str]]] = []
    actions += [('append', p, None) for p in appends]
    for item in sets:
        if '=' not in item:
            raise click.BadParameter(f"expected PATH=TEXT, got '{item}'", param_hint='--set')
        path, text = item.split('=', 1)
        actions.append(('set', path, text))
    actions += [('toggle', p, None) for p in toggles]
    actions += [('remove', p, None) for p in sorted(removes, key=_removal_order)]

    try:
        for action, path, text in actions:
            tree = form.render()
            try:
                if action == 'set':
                    node = tree.find(path)
                    node.edit(text)
                elif action == 'toggle':
                    tree.find(path, kind='checkbox').press()
                elif action == 'append':
                    tree.find(f"{path}:append", kind='button').press()
                else:
                    tree.find(f"{path}:remove", kind='button').press()
            except KeyError:
                raise click.ClickException(f"No field for --{action} {path}")
            except TypeError as e:
                raise click.ClickException(f"--{action} {path}: {e}")
            logger.debug(f"Applied {action} on '{path}'")
            form.flush()
            form.receive(holder.value)
        form.render()
    except SchemaConfigError as e:
        raise click.ClickException(f"Invalid schema: {e}") from e

    result = to_plain(holder.value)
    errors = form.errors

    if in_place:
        Path(value_path).write_text(json.dumps(result, indent=2) + '\n', encoding='utf8')
        logger.info(f"Wrote {value_path}")

    if as_json:
        click.echo(json.dumps({'value': result, 'errors': errors}, indent=2, sort_keys=True))
        return

    click.echo(json.dumps(result, indent=2))
    if errors:
        click.echo(f"{len(errors)} field(s) invalid:", err=True)
        _print_errors(errors)


@cli.group('config')
def config_group():
    """Manage persistent configuration (XDG config)."""
    pass


@config_group.command('set')
@click.argument('key', type=str)
@click.argument('value', type=str)
@click.option('--yes', is_flag=True, help='Do not ask for confirmation')
def config_set(key: str, value: str, yes: bool):
    """Set a config key. Supported keys: debounce_ms, line_chars"""
    from schemaform.config import _config_file_path, get_allowed_keys, set_config_value

    if key not in get_allowed_keys():
        click.echo(f'Unsupported config key: {key}')
        return

    if not yes:
        click.echo(f'About to set {key} in {_config_file_path()} to {value}')
        if not click.confirm('Proceed?'):
            click.echo('Aborted.')
            return

    if set_config_value(key, value):
        click.echo(f'Set {key} = {value}')
    else:
        click.echo('Failed to set config (validation or IO error)')


@config_group.command('get')
@click.argument('key', type=str)
@click.option('--defaults', is_flag=True, help='Show environment/config/code defaults for the key')
def config_get(key: str, defaults: bool):
    from schemaform.config import get_effective_value

    eff = get_effective_value(key)
    if not eff:
        click.echo(f'Unsupported config key: {key}')
        return
    if defaults:
        click.echo(f"env: {eff.get('env')}")
        click.echo(f"config: {eff.get('config')}")
        click.echo(f"code_default: {eff.get('code_default')}")
    click.echo(f"effective: {eff.get('effective')}" if defaults else str(eff.get('effective')))


@config_group.command('message')
@click.argument('keyword', type=str)
@click.argument('text', type=str)
def config_message(keyword: str, text: str):
    """Override the message shown for a validation KEYWORD (e.g. maximum)."""
    from schemaform.config import set_error_message

    if set_error_message(keyword, text):
        click.echo(f'Set message for {keyword} = {text}')
    else:
        click.echo('Failed to set message (validation or IO error)')
