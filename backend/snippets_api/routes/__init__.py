# Routes package init
"""
Snippets API — Routes Package
==============================

Route Inventory:
    - snippets.py: {API_BASE_PATH}/{API_NAME}[/{id}]  (all snippet operations)
    - health.py:   GET /health                         (service health check)

Routes stay thin: they read the request, call the Request Router and the
snippet service, and shape the JSON response. Authorization and filtering
live in the services package.
"""
