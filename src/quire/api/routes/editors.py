from fastapi import APIRouter, Depends, Request

from ...auth import RequestContext
from ...enums import Scope
from ..deps import get_registry, require_scope

router = APIRouter(prefix="/editors", tags=["editors"])


@router.get("")
def list_editors(
    request: Request,
    context: RequestContext = Depends(require_scope(Scope.SCHEMAS)),
):
    """Registered field editors and the config fields each one accepts."""
    registry = get_registry(request)
    return [
        {"id": editor_id, "configFields": registry.lookup(editor_id).config_fields()}
        for editor_id in registry.ids()
    ]
