"""
API models for the rewrite proxy endpoint.

Responses are plain text, so only the request body has a schema.
"""

from pydantic import BaseModel, ConfigDict, Field

class RewritePayload(BaseModel):
    """Body of POST /api/rewrite."""
    prompt: str = Field(..., min_length=1, strict=True, description="Full instruction to send upstream")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "prompt": "Rewrite the user's message to improve clarity, tone, and impact.\n\nUser text:\n\"\"\"tell client we need 2 more days\"\"\""
        }
    })
