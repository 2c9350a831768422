"""
FastAPI main application
Live Quiz Session Engine - polling API for admins and players

Routers in quiz_engine/api/:
- health.py: Health check
- admin.py: Session start/advance/end, status and results
- play.py: Player join, question polling, answers, reveal, results

Routers reach the engine through app.state (see api/deps.py); the engine
is built in the lifespan and torn down on shutdown.
"""
from contextlib import asynccontextmanager
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from quiz_engine.api import admin, health, play
from quiz_engine.catalog import InMemoryGameCatalog, load_games
from quiz_engine.config import load_settings
from quiz_engine.engine import QuizEngine
from quiz_engine.errors import AccessError, InputError
from quiz_engine.models import EngineSettings


# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[EngineSettings] = None,
    catalog: Optional[InMemoryGameCatalog] = None,
    engine: Optional[QuizEngine] = None,
) -> FastAPI:
    """
    Build the application

    Args:
        settings: Engine settings (default: loaded from YAML)
        catalog: Game catalog (default: loaded from settings.games_path)
        engine: Prebuilt engine, used as-is (tests inject one with a fake clock)
    """
    settings = settings or (engine.settings if engine else load_settings())
    logging.getLogger("quiz_engine").setLevel(settings.log_level.upper())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup and shutdown events"""
        if engine is not None:
            app.state.engine = engine
        else:
            try:
                games = catalog or InMemoryGameCatalog(load_games(settings.games_path))
            except Exception as e:
                logger.error(f"❌ Failed to load games: {e}")
                raise
            app.state.engine = QuizEngine(games, settings)
        logger.info(f"✅ Server started with {len(app.state.engine.catalog)} games")

        yield

        app.state.engine.close()
        logger.info("🛑 Server shutting down")

    app = FastAPI(
        title="Quiz Session Engine",
        description="Timed multi-player quiz sessions over a polling API",
        version="1.0.0",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ==================== ERROR MAPPING ====================

    @app.exception_handler(InputError)
    async def input_error_handler(request: Request, exc: InputError):
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(AccessError)
    async def access_error_handler(request: Request, exc: AccessError):
        return JSONResponse(status_code=403, content={"error": str(exc)})

    @app.exception_handler(Exception)
    async def system_error_handler(request: Request, exc: Exception):
        logger.error(
            f"❌ ERROR in {request.method} {request.url.path}\n"
            f"Error: {str(exc)}\n"
            f"Error Type: {type(exc).__name__}",
            exc_info=exc
        )
        return JSONResponse(status_code=500, content={"error": "A system error occurred"})

    # ==================== INCLUDE ROUTERS ====================

    app.include_router(health.router)
    app.include_router(admin.router)
    app.include_router(play.router)

    return app


# ==================== RUN SERVER ====================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
