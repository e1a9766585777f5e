"""
FastAPI application layer for the Say It Better rewriter.

This package exposes the rewrite proxy over HTTP, serves the rewrite form,
and reports service health.
"""

API_VERSION = "1.0.0"
