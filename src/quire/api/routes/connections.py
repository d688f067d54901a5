from fastapi import APIRouter, Depends

from ...client import LocalContentApi
from ...enums import Scope
from ..deps import content_api

router = APIRouter(prefix="/connections", tags=["connections"])


@router.get("")
def list_connections(api: LocalContentApi = Depends(content_api(Scope.CONNECTIONS))):
    return [connection.to_dict() for connection in api.list_connections()]
