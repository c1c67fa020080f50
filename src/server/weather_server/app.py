"""Weather Server - FastAPI application.

Serves the weather API and the bundled front-end build.
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import httpx
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse

from src.tools.api_tools.open_meteo.open_meteo import OpenMeteoClient
from src.tools.data_tools.response_cache.response_cache import ResponseCache

from .gateway import WeatherGateway, WeatherGatewayError


logger = logging.getLogger(__name__)


def get_client_build_dir() -> Path:
    """Get the directory holding the front-end build."""
    return Path(os.getenv('WEATHER_CLIENT_BUILD_DIR', './frontend/build'))


def build_gateway() -> WeatherGateway:
    """Create the gateway with its process-wide cache and HTTP client."""
    return WeatherGateway(
        cache=ResponseCache(),
        client=OpenMeteoClient(httpx.Client()),
    )


def get_gateway(request: Request) -> WeatherGateway:
    return request.app.state.gateway


def create_app(
    gateway: WeatherGateway | None = None,
    client_build_dir: str | Path | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        gateway: Gateway serving weather requests. A new one with an empty
            cache is created if omitted.
        client_build_dir: Front-end build directory. Defaults to
            WEATHER_CLIENT_BUILD_DIR or ./frontend/build.

    Returns:
        The configured FastAPI application.
    """
    owns_gateway = gateway is None

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if owns_gateway:
            app.state.gateway.client.close()

    app = FastAPI(title='Weather Server', lifespan=lifespan)
    app.state.gateway = gateway or build_gateway()
    build_dir = Path(client_build_dir or get_client_build_dir()).resolve()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=['*'],
        allow_methods=['*'],
        allow_headers=['*'],
    )

    @app.exception_handler(WeatherGatewayError)
    async def handle_gateway_error(request: Request, exc: WeatherGatewayError):
        return JSONResponse(status_code=exc.status_code, content={'error': exc.message})

    @app.get('/api/weather/{city}')
    def get_weather(
        city: str,
        gateway: WeatherGateway = Depends(get_gateway),
    ) -> dict[str, Any]:
        logger.info('Weather requested for city: %s', city)
        return gateway.get_current_conditions(city)

    @app.get('/api/forecast/{city}')
    def get_forecast(
        city: str,
        gateway: WeatherGateway = Depends(get_gateway),
    ) -> dict[str, Any]:
        logger.info('Forecast requested for city: %s', city)
        return gateway.get_forecast(city)

    # Registered last so the API routes take priority.
    @app.get('/{full_path:path}', include_in_schema=False)
    def serve_client(full_path: str):
        if full_path:
            try:
                requested = (build_dir / full_path).resolve()
                is_asset = requested.is_relative_to(build_dir) and requested.is_file()
            except (OSError, ValueError):
                # NUL bytes, overlong names and the like.
                is_asset = False
            if is_asset:
                return FileResponse(requested)

        index = build_dir / 'index.html'
        if not index.is_file():
            return JSONResponse(status_code=404, content={'error': 'Not Found'})
        return FileResponse(index)

    return app
