# File: src/blockinsight/api/server.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from .routes import blocks_router
from ..config.explorer_config import DEFAULT_POOLS_PATH, ExplorerConfig
from ..exceptions import CollaboratorError, InvalidInputError, NotFoundError, RpcError
from ..explorer.api import ExplorerAPI
from ..explorer.cache import ConfirmationCache
from ..explorer.pools import PoolAttributor
from ..node.rpc import JsonRpcClient, RpcNodeService, RpcTransactionService
from ..utils.config import Config

logger = logging.getLogger(__name__)


def build_explorer(config: ExplorerConfig, client: JsonRpcClient) -> ExplorerAPI:
    cache = ConfirmationCache(
        block_cache_size=config.get("cache.block_size", Config.DEFAULT_BLOCK_CACHE_SIZE),
        summary_cache_size=config.get("cache.summary_size", Config.DEFAULT_BLOCK_SUMMARY_CACHE_SIZE)
    )
    return ExplorerAPI(
        node=RpcNodeService(client),
        transactions=RpcTransactionService(client),
        pools=PoolAttributor.from_file(config.get("pools.path", DEFAULT_POOLS_PATH)),
        cache=cache,
        block_limit=config.get("listing.limit", Config.BLOCK_LIMIT)
    )


def build_rpc_client(config: ExplorerConfig) -> JsonRpcClient:
    return JsonRpcClient(
        url=config.get("rpc.url"),
        user=config.get("rpc.user"),
        password=config.get("rpc.password"),
        timeout=config.get("rpc.timeout", 30)
    )


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError):
        return PlainTextResponse("Not found", status_code=404)

    @app.exception_handler(InvalidInputError)
    async def invalid_input(request: Request, exc: InvalidInputError):
        return PlainTextResponse(str(exc), status_code=400)

    @app.exception_handler(RpcError)
    async def rpc_error(request: Request, exc: RpcError):
        return PlainTextResponse(f"{exc.message}. Code:{exc.code}", status_code=400)

    @app.exception_handler(CollaboratorError)
    async def collaborator_error(request: Request, exc: CollaboratorError):
        logger.error(f"Node request failed: {exc}", exc_info=exc)
        return PlainTextResponse(str(exc), status_code=503)


def create_app(
    config: Optional[ExplorerConfig] = None,
    explorer: Optional[ExplorerAPI] = None
) -> FastAPI:
    client = None
    if explorer is None:
        config = config or ExplorerConfig()
        client = build_rpc_client(config)
        explorer = build_explorer(config, client)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if client is not None:
            await client.close()

    app = FastAPI(title="blockinsight API", lifespan=lifespan)
    app.state.explorer = explorer
    
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    register_error_handlers(app)
    app.include_router(blocks_router)
    
    return app
