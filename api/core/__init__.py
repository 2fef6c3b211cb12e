"""
Plumbing shared by the blog API.

Holds the SQLite connection wrapper and its error types, environment
settings, structlog setup and trace-id resolution. Post SQL and request
handling live in `posts/`.
"""
