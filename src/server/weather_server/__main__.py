"""Weather Server - Entry point."""

import logging
import sys

import click
import uvicorn
from dotenv import load_dotenv

from observability import init_tracing

from .app import create_app


load_dotenv()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@click.command()
@click.option('--host', 'host', default='0.0.0.0', envvar='HOST', help='Server host')
@click.option('--port', 'port', default=5000, type=int, envvar='PORT', help='Server port')
@click.option(
    '--tracing/--no-tracing',
    'tracing',
    default=False,
    envvar='WEATHER_TRACING',
    help='Export traces to Phoenix',
)
def main(host: str, port: int, tracing: bool):
    """Starts the Weather server."""
    try:
        if tracing:
            init_tracing(project_name='weather-server')

        app = create_app()

        logger.info(f'Starting Weather server at http://{host}:{port}')
        uvicorn.run(app, host=host, port=port)

    except Exception as e:
        logger.error(f'An error occurred during server startup: {e}')
        sys.exit(1)


if __name__ == '__main__':
    main()
