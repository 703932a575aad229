"""Task-related Marshmallow schemas."""

from marshmallow import Schema, ValidationError, fields, validate, validates_schema

from todo_app.models import TaskStatus, to_naive_utc


class TaskSchema(Schema):
    """Schema for task serialization."""

    id = fields.Int(dump_only=True)
    name = fields.Str(required=True)
    status = fields.Enum(TaskStatus, dump_only=True)
    created_at = fields.DateTime(dump_only=True, format="iso")
    completed_at = fields.DateTime(dump_only=True, format="iso", allow_none=True)


class TaskCreateSchema(Schema):
    """Schema for task creation validation."""

    name = fields.Str(required=True, validate=validate.Length(min=1, max=255))


class TasksResponseSchema(Schema):
    """Schema for the task list response."""

    tasks = fields.List(fields.Nested(TaskSchema))
    total = fields.Int()


class AnalyticsQuerySchema(Schema):
    """Optional analytics range from the query string."""

    start = fields.DateTime(format="iso", load_default=None)
    end = fields.DateTime(format="iso", load_default=None)

    @validates_schema
    def validate_range(self, data, **kwargs):
        start, end = data.get("start"), data.get("end")
        if start is not None and end is not None and to_naive_utc(start) > to_naive_utc(end):
            raise ValidationError("start must not be after end", field_name="start")


class AnalyticsSchema(Schema):
    """Schema for analytics results."""

    start = fields.DateTime(format="iso")
    end = fields.DateTime(format="iso")
    created_count = fields.Int()
    completed_count = fields.Int()
