"""Command line interface."""
import logging

import click

from buildconf.core.checks import verify, verify_matrix
from buildconf.core.composer import compose, summary
from buildconf.core.config import config_by_name, get_config
from buildconf.core.errors import handle_errors
from buildconf.core.flags import FLAG_HELP, Flags, parse_env_pairs
from buildconf.core.project import load_project
from buildconf.core.render import FORMATS, render
from buildconf.extensions import setup_logging

logger = logging.getLogger(__name__)


def flag_options(f):
    """Attach the build flag options to a command."""
    options = [
        click.option('--production', is_flag=True, help=FLAG_HELP['production']),
        click.option('--server', default=None, help=FLAG_HELP['server']),
        click.option('--extract-css', is_flag=True, help=FLAG_HELP['extract_css']),
        click.option('--coverage', is_flag=True, help=FLAG_HELP['coverage']),
        click.option('--analyze', is_flag=True, help=FLAG_HELP['analyze']),
        click.option('--env', 'env_pairs', multiple=True, metavar='KEY[=VALUE]',
                     help='Bundler-style env flag, e.g. --env extractCss=true'),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def build_flags(production, server, extract_css, coverage, analyze, env_pairs):
    """Merge --env pairs with explicit options; explicit switches win."""
    try:
        values = parse_env_pairs(env_pairs)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint='--env')

    values = dict(Flags.from_mapping(values).to_dict())
    if production:
        values['production'] = True
    if server is not None:
        values['server'] = server
    if extract_css:
        values['extractCss'] = True
    if coverage:
        values['coverage'] = True
    if analyze:
        values['analyze'] = True
    return Flags.from_mapping(values)


@click.group()
@click.option('--root', default=None, help='Project root (defaults to BUILDCONF_ROOT or .)')
@click.option('--settings', 'settings_name', type=click.Choice(sorted(config_by_name)),
              default=None, help='Tool settings profile')
@click.pass_context
def buildconf_cli(ctx, root, settings_name):
    """Compose bundler configuration from build flags."""
    settings = get_config(settings_name)
    setup_logging(settings)
    ctx.ensure_object(dict)
    ctx.obj['settings'] = settings
    ctx.obj['root'] = root or settings.PROJECT_ROOT


@buildconf_cli.command()
@flag_options
@click.pass_context
@handle_errors
def show(ctx, **options):
    """Summarize the configuration for the given flags."""
    flags = build_flags(**options)
    config = compose(flags, load_project(ctx.obj['root']))
    info = summary(config)

    click.echo(f"Mode:        {info['mode']}")
    click.echo(f"Devtool:     {info['devtool']}")
    click.echo(f"Styles:      {info['styles']}")
    click.echo(f"Coverage:    {'instrumented' if info['instrumented'] else 'off'}")
    click.echo(f"Bundle:      {info['filename']}")
    click.echo(f"Source map:  {info['source_map_filename']}")
    click.echo(f"Chunk:       {info['chunk_filename']}")
    click.echo('Entries:')
    for name, modules in info['entries'].items():
        click.echo(f"  {name}: {', '.join(modules)}")
    click.echo(f"Rules ({len(info['rules'])}):")
    for name in info['rules']:
        click.echo(f"  - {name}")
    click.echo(f"Plugins ({len(info['plugins'])}):")
    for name in info['plugins']:
        click.echo(f"  - {name}")


@buildconf_cli.command('render')
@flag_options
@click.option('--format', 'fmt', type=click.Choice(FORMATS), default=None,
              help='Output format (defaults to the settings OUTPUT_FORMAT)')
@click.option('--output', '-o', type=click.Path(dir_okay=False, writable=True), default=None,
              help='Write to a file instead of stdout')
@click.pass_context
@handle_errors
def render_command(ctx, fmt, output, **options):
    """Render the full configuration as JSON or a webpack.config.js module."""
    flags = build_flags(**options)
    fmt = fmt or ctx.obj['settings'].OUTPUT_FORMAT
    config = compose(flags, load_project(ctx.obj['root']))
    text = render(config, fmt)

    if output:
        with open(output, 'w', encoding='utf-8') as f:
            f.write(text)
        logger.info(f"Wrote {fmt} configuration to {output}")
        click.echo(f"✓ Wrote {output}")
    else:
        click.echo(text, nl=False)


@buildconf_cli.command()
@flag_options
@click.option('--all', 'check_all', is_flag=True, help='Check every flag combination')
@click.pass_context
@handle_errors
def check(ctx, check_all, **options):
    """Verify configuration invariants."""
    project = load_project(ctx.obj['root'])

    if check_all:
        failures = verify_matrix(project)
        for flags, problems in failures.items():
            click.echo(f"✗ {flags.to_dict()}")
            for problem in problems:
                click.echo(f"    {problem}")
        if failures:
            ctx.exit(1)
        click.echo('✓ All flag combinations valid')
        return

    flags = build_flags(**options)
    problems = verify(compose(flags, project), project=project)
    for problem in problems:
        click.echo(f"✗ {problem}")
    if problems:
        ctx.exit(1)
    click.echo('✓ Configuration valid')


@buildconf_cli.command('flags')
def list_flags():
    """List recognized flags and their defaults."""
    defaults = Flags()
    for name, help_text in FLAG_HELP.items():
        click.echo(f"{name:<12} default={getattr(defaults, name)!r:<6} {help_text}")


def main():
    buildconf_cli(obj={})
