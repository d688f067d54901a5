import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ...client import LocalContentApi
from ...content import Content
from ...controller import ContentEditorController
from ...enums import EditorState, Scope
from ...errors import NotFoundError
from ..deps import content_api, get_config, get_registry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/content", tags=["content"])

get_api = content_api(Scope.CONTENT)


class UrlResponse(BaseModel):
    url: str


def parse_content(data: dict[str, Any], content_id: str | None = None) -> Content:
    if content_id is not None:
        data = {**data, "id": content_id}
    try:
        return Content.model_validate(data)
    except PydanticValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("")
def list_content(api: LocalContentApi = Depends(get_api)):
    return [content.to_dict() for content in api.list_content()]


@router.post("/publish", response_model=UrlResponse)
def publish_content(data: dict[str, Any] = Body(...), api: LocalContentApi = Depends(get_api)):
    try:
        return UrlResponse(url=api.publish_content(parse_content(data)))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/unpublish", response_model=UrlResponse)
def unpublish_content(data: dict[str, Any] = Body(...), api: LocalContentApi = Depends(get_api)):
    try:
        return UrlResponse(url=api.unpublish_content(parse_content(data)))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/preview", response_model=UrlResponse)
def preview_content(data: dict[str, Any] = Body(...), api: LocalContentApi = Depends(get_api)):
    try:
        return UrlResponse(url=api.preview_content(parse_content(data)))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{content_id}")
def get_content(content_id: str, api: LocalContentApi = Depends(get_api)):
    try:
        return api.get_content(content_id).to_dict()
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{content_id}", response_model=UrlResponse)
def save_content(
    content_id: str,
    data: dict[str, Any] = Body(...),
    api: LocalContentApi = Depends(get_api),
):
    return UrlResponse(url=api.save_content(parse_content(data, content_id)))


@router.get("/{content_id}/editor")
def get_content_editor(
    request: Request,
    content_id: str,
    tab: str | None = None,
    language: str | None = None,
    api: LocalContentApi = Depends(get_api),
):
    config = get_config(request)
    language = language or config.language
    if language not in config.languages:
        raise HTTPException(status_code=400, detail=f"Unknown language \"{language}\"")

    controller = ContentEditorController(
        api,
        registry=get_registry(request),
        language=language,
        languages=config.languages,
    )
    view = controller.load(content_id, tab)

    if view.state == EditorState.ERROR:
        raise HTTPException(
            status_code=404,
            detail={"message": view.error, "fallbackUrl": view.fallback_url},
        )

    return view.to_dict()
