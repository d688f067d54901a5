"""Database-backed stores, one instance per project environment."""

from __future__ import annotations

import logging

from ..content import Connection, Content
from ..errors import AuthorizationError
from ..models import ConnectionRecord, ContentRecord, SchemaRecord
from ..native import is_native, native_schemas
from ..schema import Schema
from ..utils import get_now

logger = logging.getLogger(__name__)


class DBSchemaStore:
    def __init__(self, project: str, environment: str):
        self.project = project
        self.environment = environment

    def _query(self):
        return SchemaRecord.select().where(
            (SchemaRecord.project == self.project)
            & (SchemaRecord.environment == self.environment)
        )

    def get(self, schema_id: str) -> Schema | None:
        natives = native_schemas()
        if schema_id in natives:
            return natives[schema_id]

        record = self._query().where(SchemaRecord.schema_id == schema_id).first()
        if record is None:
            return None
        return Schema.model_validate(record.data)

    def all(self) -> list[Schema]:
        schemas = list(native_schemas().values())
        schemas.extend(
            Schema.model_validate(record.data)
            for record in self._query().order_by(SchemaRecord.schema_id)
        )
        return schemas

    def save(self, schema: Schema) -> Schema:
        if is_native(schema.id):
            raise AuthorizationError(f"Schema \"{schema.id}\" is native and cannot be changed")

        record = self._query().where(SchemaRecord.schema_id == schema.id).first()
        if record is None:
            record = SchemaRecord(
                project=self.project,
                environment=self.environment,
                schema_id=schema.id,
            )
        record.data = schema.to_dict()
        record.save()
        logger.info(f"Schema saved: {self.project}/{self.environment}/{schema.id}")
        return schema


class DBContentStore:
    def __init__(self, project: str, environment: str):
        self.project = project
        self.environment = environment

    def _query(self):
        return ContentRecord.select().where(
            (ContentRecord.project == self.project)
            & (ContentRecord.environment == self.environment)
        )

    def get(self, content_id: str) -> Content | None:
        record = self._query().where(ContentRecord.content_id == content_id).first()
        if record is None:
            return None
        return Content.model_validate(record.data)

    def all(self) -> list[Content]:
        return [
            Content.model_validate(record.data)
            for record in self._query().order_by(ContentRecord.sort, ContentRecord.id)
        ]

    def save(self, content: Content, user: str | None = None) -> Content:
        now = get_now()
        if content.create_date is None:
            content.create_date = now
            content.created_by = user
        content.update_date = now
        content.updated_by = user

        record = self._query().where(ContentRecord.content_id == content.id).first()
        if record is None:
            record = ContentRecord(
                project=self.project,
                environment=self.environment,
                content_id=content.id,
            )
        record.schema_id = content.schema_id
        record.parent_id = content.parent_id
        record.is_published = content.is_published
        record.sort = content.sort
        record.data = content.to_dict()
        record.save()
        logger.info(f"Content saved: {self.project}/{self.environment}/{content.id}")
        return content


class DBConnectionStore:
    def __init__(self, project: str, environment: str):
        self.project = project
        self.environment = environment

    def _query(self):
        return ConnectionRecord.select().where(
            (ConnectionRecord.project == self.project)
            & (ConnectionRecord.environment == self.environment)
        )

    def get(self, connection_id: str) -> Connection | None:
        record = self._query().where(ConnectionRecord.connection_id == connection_id).first()
        if record is None:
            return None
        return Connection.model_validate(record.data)

    def all(self) -> list[Connection]:
        return [Connection.model_validate(record.data) for record in self._query()]

    def save(self, connection: Connection) -> Connection:
        record = self._query().where(ConnectionRecord.connection_id == connection.id).first()
        if record is None:
            record = ConnectionRecord(
                project=self.project,
                environment=self.environment,
                connection_id=connection.id,
            )
        record.data = connection.to_dict()
        record.save()
        logger.info(f"Connection saved: {self.project}/{self.environment}/{connection.id}")
        return connection
