# Services package init
"""
Noteful Backend — Services Layer
=================================

What:  Request-handling logic sitting between routes (HTTP) and repositories (storage).
Why:   Separation of concerns — routes handle HTTP, services handle business rules.
How:   Services receive their collaborators at construction and return
       response schemas; they never see a Request object.

Service Inventory:
    - Sanitizer (abstract): Interface for the outbound HTML filter
    - BleachSanitizer: Whitelist implementation using bleach
    - NoteService: Validation, resolve-or-404, sanitize and serialize for notes

Why services are separate from routes:
    1. Testability: Services can be unit-tested with fake repositories
    2. Replaceability: Swap the sanitizer or the storage without touching routes
"""
