"""GraphQL-over-HTTP API schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class GraphQLRequestBody(BaseModel):
    """Body of POST /graphql."""

    model_config = ConfigDict(populate_by_name=True)

    query: str = Field(..., min_length=1, description="GraphQL document")
    operation_name: str | None = Field(
        default=None, alias="operationName", description="Operation to run"
    )
    variables: dict[str, Any] | None = Field(default=None, description="Operation variables")


class GraphQLResponseBody(BaseModel):
    """Body returned by POST /graphql."""

    data: dict[str, Any] | None = None
    errors: list[dict[str, Any]] | None = None
