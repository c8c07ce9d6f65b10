"""Pydantic schemas for error and health responses."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ErrorResponse(BaseModel):
    """Uniform error envelope returned for every failed request."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status_code: int = Field(description="HTTP status code")
    message: str = Field(description="Human-readable error message")
    error_code: str = Field(description="Machine-readable error code")
    timestamp: str = Field(description="ISO 8601 time the error occurred")
    path: str = Field(description="Request path")


class HealthResponse(BaseModel):
    """Health check payload."""

    status: str = Field(description="Service status")
    timestamp: str = Field(description="ISO 8601 server time")
    version: str = Field(description="Application version")
