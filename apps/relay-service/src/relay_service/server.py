"""Socket.IO + FastAPI server for the relay service.

One ASGI app: Socket.IO carries the realtime gateway, every other path
falls through to FastAPI (REST glue, /health, /metrics).
"""

import logging
from contextlib import asynccontextmanager
from typing import Any

import socketio
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from relay_service.api import register_error_handlers, router
from relay_service.config import RelayConfig, get_config
from relay_service.gateway import GatewayEmitter, register_gateway_handlers
from relay_service.services import RelayServices, build_services

logger = logging.getLogger(__name__)


def create_fastapi_app(services: RelayServices, lifespan: Any = None) -> FastAPI:
    """Create the HTTP application around an existing service container."""
    fastapi_app = FastAPI(
        title="Relay Service",
        description="Real-time multilingual messaging relay",
        version="0.1.0",
        lifespan=lifespan,
    )
    fastapi_app.state.services = services

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @fastapi_app.get("/health")
    async def health_check():
        """Health check endpoint with provider readiness."""
        return {
            "status": "healthy",
            "service": "relay-service",
            "providers": {
                "translation": services.translator.is_ready,
                "stt": services.stt.is_ready,
                "tts": services.tts.is_ready,
                "storage": services.audio_store.is_ready,
            },
        }

    @fastapi_app.get("/metrics")
    async def metrics_endpoint():
        """Prometheus metrics endpoint (sends, failures by stage, stage timings, sessions)."""
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    fastapi_app.include_router(router)
    register_error_handlers(fastapi_app)
    return fastapi_app


def create_sio(config: RelayConfig) -> socketio.AsyncServer:
    origin = config.server.client_origin
    return socketio.AsyncServer(
        async_mode="asgi",
        cors_allowed_origins="*" if origin == "*" else [origin],
        logger=False,  # Use our own logger
        engineio_logger=False,
        max_http_buffer_size=config.server.max_buffer_size,
        ping_interval=config.server.ping_interval,
        ping_timeout=config.server.ping_timeout,
    )


def create_app(
    config: RelayConfig | None = None,
    services: RelayServices | None = None,
) -> socketio.ASGIApp:
    """Create FastAPI + Socket.IO ASGI application.

    Args:
        config: Relay configuration (loaded from the environment if omitted)
        services: Prebuilt service container (built from config if omitted)

    Returns:
        Combined ASGI app with FastAPI and Socket.IO.
    """
    config = config or get_config()
    services = services or build_services(config)

    sio = create_sio(config)
    emitter = GatewayEmitter(sio, services.channel)
    register_gateway_handlers(sio, services.sessions, services.membership, services.pipeline)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        emitter.start()
        try:
            yield
        finally:
            await emitter.stop()
            services.shutdown()

    fastapi_app = create_fastapi_app(services, lifespan=lifespan)
    logger.info("Relay service handlers registered")

    return socketio.ASGIApp(
        socketio_server=sio,
        other_asgi_app=fastapi_app,
    )
