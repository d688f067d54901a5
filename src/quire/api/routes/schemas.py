import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import ValidationError as PydanticValidationError

from ...auth import RequestContext
from ...enums import Scope
from ...errors import AuthorizationError, CyclicSchemaError, NotFoundError
from ...resolver import SchemaResolver
from ...schema import Schema
from ...stores.db import DBContentStore, DBSchemaStore
from ..deps import require_scope

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/schemas", tags=["schemas"])


def get_store(context: RequestContext = Depends(require_scope(Scope.SCHEMAS))) -> DBSchemaStore:
    return DBSchemaStore(context.project, context.environment)


@router.get("")
def list_schemas(store: DBSchemaStore = Depends(get_store)):
    return [schema.to_dict() for schema in store.all()]


@router.get("/{schema_id}")
def get_schema(schema_id: str, store: DBSchemaStore = Depends(get_store)):
    schema = store.get(schema_id)
    if schema is None:
        raise HTTPException(status_code=404, detail=f"Schema by id \"{schema_id}\" not found")
    return schema.to_dict()


@router.get("/{schema_id}/merged")
def get_merged_schema(schema_id: str, store: DBSchemaStore = Depends(get_store)):
    resolver = SchemaResolver(store, DBContentStore(store.project, store.environment))
    try:
        return resolver.resolve(schema_id).to_dict()
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CyclicSchemaError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/{schema_id}")
def save_schema(
    schema_id: str,
    data: dict[str, Any] = Body(...),
    store: DBSchemaStore = Depends(get_store),
):
    try:
        schema = Schema.model_validate({**data, "id": schema_id})
    except PydanticValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    try:
        return store.save(schema).to_dict()
    except AuthorizationError as e:
        logger.info(str(e))
        raise HTTPException(status_code=403, detail=str(e))
