from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from graphql_i18n.api.dependencies import configure_i18n
from graphql_i18n.api.lifespan import lifespan
from graphql_i18n.api.routes.health import router as health_router
from graphql_i18n.api.routes.root import router as root_router
from graphql_i18n.api.routes.translations import router as translations_router
from graphql_i18n.api.schemas import ErrorResponse
from graphql_i18n.core.i18n import I18n
from graphql_i18n.errors import DataShapeError, DuplicateError, I18nError, NotFoundError, UnknownTypeError

_STATUS_BY_ERROR: list[tuple[type[I18nError], int]] = [
    (UnknownTypeError, status.HTTP_404_NOT_FOUND),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (DataShapeError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (DuplicateError, status.HTTP_409_CONFLICT),
]


async def _i18n_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    code = next((s for cls, s in _STATUS_BY_ERROR if isinstance(exc, cls)), status.HTTP_400_BAD_REQUEST)
    return JSONResponse(status_code=code, content=ErrorResponse(detail=str(exc)).model_dump())


def create_app(i18n: I18n | None = None) -> FastAPI:
    if i18n is not None:
        configure_i18n(i18n)

    app = FastAPI(
        title="GraphQL i18n API",
        description="Manage translation records overlaid onto GraphQL results.",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_exception_handler(I18nError, _i18n_error_handler)

    app.include_router(root_router, include_in_schema=False)
    app.include_router(health_router, include_in_schema=False)
    app.include_router(translations_router)

    return app
