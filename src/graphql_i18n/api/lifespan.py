from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from graphql_i18n.api.dependencies import shutdown_i18n, startup_i18n


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    await startup_i18n()
    yield
    await shutdown_i18n()
