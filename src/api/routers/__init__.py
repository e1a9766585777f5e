"""
API route handlers for different endpoint groups.

Each router handles one surface: health probes, the rewrite proxy, and the
HTML form.
"""
