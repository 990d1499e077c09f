from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response, status

from graphql_i18n.api.dependencies import get_i18n
from graphql_i18n.core.i18n import I18n
from graphql_i18n.models import Where, WhereUnique

router = APIRouter(prefix="/translations", tags=["translations"])


@router.get("/{type_name}", response_model=dict[str, dict[str, Any]])
async def find_translations(
    type_name: str,
    ids: list[str] = Query(default=[]),
    lang: str | None = None,
    i18n: I18n = Depends(get_i18n),
) -> dict[str, dict[str, Any]]:
    """Translations for several ids, filling gaps from the default language."""
    return await i18n.find(Where(ids=ids, type=type_name), lang)


@router.get("/{type_name}/{record_id}", response_model=dict[str, Any])
async def get_translation(
    type_name: str,
    record_id: str,
    lang: str | None = None,
    i18n: I18n = Depends(get_i18n),
) -> dict[str, Any]:
    """One translation, falling back to the default language."""
    data = await i18n.find_one(WhereUnique(id=record_id, type=type_name), lang)
    if data is None:
        raise HTTPException(status_code=404, detail=f"No translation for {type_name} {record_id}.")
    return data


@router.put("/{type_name}/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def sync_translation(
    type_name: str,
    record_id: str,
    data: dict[str, Any] = Body(...),
    lang: str | None = None,
    i18n: I18n = Depends(get_i18n),
) -> Response:
    await i18n.sync(WhereUnique(id=record_id, type=type_name), data, lang)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{type_name}/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def destroy_translation(
    type_name: str,
    record_id: str,
    lang: str | None = None,
    i18n: I18n = Depends(get_i18n),
) -> Response:
    await i18n.destroy(WhereUnique(id=record_id, type=type_name), lang)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
