"""
FastAPI dependencies for request processing.

Dependencies hand the loaded ModelManager, the rewrite proxy and the prompt
builder to endpoints, and are the seam tests override.
"""
