# Routes package init
"""
Biodex Backend — API Routes Package
=====================================

Route Inventory:
    - species.py:   GET    /api/species            (list)
                    GET    /api/species/{id}       (detail)
                    PATCH  /api/species/{id}       (owner-only update)
                    DELETE /api/species/{id}       (owner-only delete)
    - profiles.py:  GET    /api/profiles           (users list)
    - health.py:    GET    /health                 (service health check)

Routes stay thin: read the request, call a service, shape the response.
"""
