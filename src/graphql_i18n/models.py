from typing import Any

from pydantic import BaseModel

TranslationData = dict[str, Any]


class WhereUnique(BaseModel):
    id: str
    type: str


class Where(BaseModel):
    ids: list[str]
    type: str


class TranslationRecord(BaseModel):
    type: str
    id: str
    language: str
    data: TranslationData
