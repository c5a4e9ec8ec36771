# Middleware package init
"""
MyGram Backend - Middleware Package
====================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: generate the correlation id used by every later log line
    2. Logging: access line with status and duration, tagged with that id
    3. CORS: FastAPI's CORSMiddleware (handles preflight)

Authentication is not middleware: it is the `get_current_user_id`
dependency, attached to the routers that need it.
"""
