"""FastAPI application."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from skillrouter import __version__
from skillrouter.api.deps import close_deps, init_deps
from skillrouter.api.routers import health, route, skills
from skillrouter.errors import (
    GuidelineFetchError,
    InvalidProjectTypeError,
    ProjectNotFoundError,
    SkillRouterError,
    UnknownSkillError,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_deps()
    yield
    await close_deps()


_STATUS = {
    UnknownSkillError: 404,
    ProjectNotFoundError: 404,
    InvalidProjectTypeError: 422,
    GuidelineFetchError: 502,
}


def create_app() -> FastAPI:
    app = FastAPI(
        title="Skill Router API",
        description="Route web front-end skill documents by project type and request keywords",
        version=__version__,
        lifespan=lifespan,
    )

    @app.exception_handler(SkillRouterError)
    async def skill_router_error(request: Request, exc: SkillRouterError) -> JSONResponse:
        status = next((code for cls, code in _STATUS.items() if isinstance(exc, cls)), 400)
        return JSONResponse(status_code=status, content={"detail": str(exc)})

    app.include_router(health.router)
    app.include_router(health.router, prefix="/api")
    app.include_router(skills.router, prefix="/api")
    app.include_router(route.router, prefix="/api")
    return app


app = create_app()
