"""Peewee ORM model definitions"""

from datetime import datetime
from zoneinfo import ZoneInfo

from peewee import (
    BooleanField,
    CharField,
    DatabaseProxy,
    DateTimeField,
    IntegerField,
    Model,
)
from playhouse.shortcuts import ThreadSafeDatabaseMetadata
from playhouse.sqlite_ext import JSONField

UTC = ZoneInfo("UTC")

# Use DatabaseProxy for deferred database binding
database_proxy = DatabaseProxy()


class BaseModel(Model):
    """Base model class - supports thread-safe metadata"""

    class Meta:
        database = database_proxy
        model_metadata_class = ThreadSafeDatabaseMetadata


class ScopedModel(BaseModel):
    """Records that belong to one project environment"""

    project = CharField()
    environment = CharField()
    created_at = DateTimeField(default=lambda: datetime.now(UTC))
    updated_at = DateTimeField(default=lambda: datetime.now(UTC))

    def save(self, *args, **kwargs):
        """Override save method to auto-update updated_at"""
        if self._pk is not None:
            self.updated_at = datetime.now(UTC)
        return super().save(*args, **kwargs)


class User(BaseModel):
    """User model. ``scopes`` maps project names to lists of scope names."""

    username = CharField(unique=True)
    token = CharField(unique=True, null=True)
    is_admin = BooleanField(default=False)
    scopes = JSONField(default=dict)
    created_at = DateTimeField(default=lambda: datetime.now(UTC))

    class Meta:
        table_name = "users"

    def has_scope(self, project: str | None, scope: str) -> bool:
        if self.is_admin:
            return True
        if not project:
            return False
        return scope in (self.scopes or {}).get(project, [])


class SchemaRecord(ScopedModel):
    schema_id = CharField()
    data = JSONField()

    class Meta:
        table_name = "schemas"
        indexes = ((("project", "environment", "schema_id"), True),)


class ContentRecord(ScopedModel):
    content_id = CharField()
    schema_id = CharField()
    parent_id = CharField(null=True)
    is_published = BooleanField(default=False)
    sort = IntegerField(default=10000)
    data = JSONField()

    class Meta:
        table_name = "content"
        indexes = ((("project", "environment", "content_id"), True),)


class ConnectionRecord(ScopedModel):
    connection_id = CharField()
    data = JSONField()

    class Meta:
        table_name = "connections"
        indexes = ((("project", "environment", "connection_id"), True),)
