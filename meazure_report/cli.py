import datetime
import logging
import os

import click
from yaml import YAMLError, load
try:
    from yaml import CSafeLoader as Loader
except ImportError:
    from yaml import SafeLoader as Loader

from .aggregation import aggregate
from .common import month_bounds
from .credentials import DEFAULT_CREDENTIALS_FILE, CredentialStore, prompt_credentials
from .errors import MeazureError
from .meazure import DEFAULT_BASE_URL, MeazureAPI
from .projection import project
from .writers import ReportWorkbook, render

logger = logging.getLogger('meazure_report')

DEFAULT_CONFIG_FILE = 'meazure.yaml'


def load_defaults(ctx, param, path):
    if not path or not os.path.exists(path):
        return path
    with open(path, 'r') as f:
        try:
            config = load(f.read(), Loader=Loader)
        except YAMLError as e:
            raise click.BadParameter(f'{path} is not valid YAML: {e}', ctx=ctx, param=param) from e
    if config is None:
        return path
    if not isinstance(config, dict):
        raise click.BadParameter(f'{path} must contain a mapping of option defaults', ctx=ctx, param=param)
    ctx.default_map = {key.replace('-', '_'): value for (key, value) in config.items()}
    return path


def setup_logging(verbose):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING,
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    logging.getLogger('requests').setLevel(logging.WARNING)
    logging.getLogger('urllib3').setLevel(logging.WARNING)


@click.command(context_settings={'auto_envvar_prefix': 'MEAZURE'},
               epilog='Leaving off -f and -t will select the current full month.')
@click.option('--config', default=DEFAULT_CONFIG_FILE, type=click.Path(dir_okay=False), is_eager=True,
              expose_value=False, callback=load_defaults, help='YAML file with option defaults')
@click.option('--from-date', '-f', type=click.DateTime(formats=['%Y-%m-%d']), help='First day, YYYY-MM-DD')
@click.option('--to-date', '-t', type=click.DateTime(formats=['%Y-%m-%d']), help='Last day, YYYY-MM-DD')
@click.option('--credentials', default=DEFAULT_CREDENTIALS_FILE, type=click.Path(dir_okay=False),
              help='Meazure credentials and rates file')
@click.option('--base-url', default=DEFAULT_BASE_URL, help='Meazure address')
@click.option('--xlsx', type=click.Path(dir_okay=False, writable=True), help='Also save the report as a workbook')
@click.option('--verbose', '-v', is_flag=True, help='Debug logging')
@click.pass_context
def entry_point(ctx, from_date, to_date, credentials, base_url, xlsx, verbose):
    """Hours and earnings per project tracked in Meazure, with a projection till the end of the range."""
    setup_logging(verbose)
    now = datetime.datetime.now()
    today = now.date()
    if from_date is None or to_date is None:
        from_date, to_date = month_bounds(today)
    else:
        from_date, to_date = from_date.date(), to_date.date()

    try:
        store = CredentialStore(credentials, provider=prompt_credentials)
        config = store.load()
        api = MeazureAPI(base_url)
        with api.authenticate(config) as session:
            entries = api.fetch_entries(session, from_date, to_date)
        result = project(aggregate(entries, config, now=now), from_date, to_date, today=today)
        click.echo(render(result, from_date, to_date))
        if xlsx:
            ReportWorkbook(xlsx).write(result, from_date, to_date)
    except MeazureError as e:
        logger.exception('Error %s', e)
        ctx.exit(1)


if __name__ == '__main__':
    entry_point()
