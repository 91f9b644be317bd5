# Routes package init
"""
Noteful Backend — API Routes Package
=====================================

What:  HTTP route handlers that accept requests and return responses.
How:   Each route module handles a specific resource.

Route Inventory:
    - notes.py:   GET    /api/notes           (list notes)
                  POST   /api/notes           (create note)
                  GET    /api/notes/{id}      (get one note)
                  DELETE /api/notes/{id}      (delete note)
                  PATCH  /api/notes/{id}      (partial update)
    - health.py:  GET    /health              (service health check)

Design Principle:
    Routes are THIN: they pick the status code, set headers and call the
    service. Validation and sanitization live in NoteService.
"""
