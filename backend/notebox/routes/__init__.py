"""
Notebox Backend — API Routes Package
======================================

Route Inventory:
    - notes.py:   POST   /create        (create a note)
                  GET    /get/{id}      (list a folder's notes)
                  GET    /view/{id}     (open one note)
                  PUT    /update        (rewrite title/content)
                  DELETE /delete        (delete a note)
    - health.py:  GET    /health        (service health check)
    - dependencies.py: per-request stores, services and authentication

Routes stay thin: read the request, call the service, return its result.
"""
