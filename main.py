from typing import Optional

from fastapi import FastAPI

from config import Settings, load_settings
from cors_config import add_cors
from error_handlers import register_error_handlers
from generator import ReportGenerator
from logger import get_logger, setup_logging
from middleware import RequestLoggingMiddleware
from routers import auth, cases, health, history, outputs, reports
from routers.frontend import build_frontend_router
from store import Store, build_store

logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[Store] = None,
    generator: Optional[ReportGenerator] = None,
) -> FastAPI:
    """
    Build the application. The store and generator are created once here and
    shared by every request; tests pass their own.
    """
    settings = settings or load_settings()
    setup_logging(settings.log_level)

    logger.info("Starting Clinical Copilot API")
    logger.info("Environment: %s", settings.app_env)
    logger.info("Database URL detected: %s", "YES" if settings.database_configured else "NO")
    logger.info("AI key detected: %s", "YES" if settings.groq_api_key else "NO")

    app = FastAPI(
        title="Clinical Copilot API",
        description="API to generate structured clinical reports with an AI model and keep a history of cases.",
        version="1.0.0",
    )
    app.state.settings = settings
    app.state.store = store or build_store(settings)
    app.state.generator = generator or ReportGenerator.from_settings(settings)

    add_cors(app, settings.cors_origins_list)
    app.add_middleware(RequestLoggingMiddleware)
    register_error_handlers(app)

    app.include_router(health.router, prefix="/api", tags=["Health"])
    app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
    app.include_router(cases.router, prefix="/api/cases", tags=["Cases"])
    app.include_router(outputs.router, prefix="/api/outputs", tags=["Outputs"])
    app.include_router(history.router, prefix="/api/history", tags=["History"])
    app.include_router(reports.router, prefix="/api", tags=["Reports"])

    if settings.is_production:
        logger.info("Running in production mode, serving SPA from %s", settings.static_dir)
        app.include_router(build_frontend_router(settings.static_dir))

    return app


app = create_app()


def run() -> None:
    settings: Settings = app.state.settings
    # Hosting platforms invoke the app per request
    if settings.serverless:
        logger.info("Serverless platform detected, not binding a socket")
        return
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
