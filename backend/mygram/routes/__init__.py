# Routes package init
"""
MyGram Backend - API Routes Package
====================================

Route Inventory:
    - users.py:          /users/register, /users/login, PUT|DELETE /users
    - photos.py:         /photos, /photos/{photo_id}
    - comments.py:       /comments, /comments/{comment_id}
    - social_medias.py:  /socialmedias, /socialmedias/{social_media_id}
    - health.py:         GET /health

Routes stay thin: bind input, resolve the acting user, call a service,
choose the status code. Authorization decisions belong to the services.
"""
