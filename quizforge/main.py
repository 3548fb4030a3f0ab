import uvicorn
from fastapi import FastAPI

from quizforge.api.routes.health import router as health_router
from quizforge.api.routes.quiz import router as quiz_router
from quizforge.api.routes.ui import router as ui_router
from quizforge.core.config import get_settings
from quizforge.core.logging import configure_logging


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level, json_logs=settings.app_env != "dev")

    app = FastAPI(
        title="QuizForge API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.include_router(ui_router)
    app.include_router(health_router)
    app.include_router(quiz_router)
    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "quizforge.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_env == "dev",
    )


if __name__ == "__main__":
    run()
