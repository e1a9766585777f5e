"""
Pydantic models for API request/response schemas.

These models define the shape of data crossing the HTTP boundary. They are
separate from the rewrite pipeline's own types.
"""
