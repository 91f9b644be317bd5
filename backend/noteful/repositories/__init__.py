# Repositories package init
"""
Noteful Backend — Storage Access Layer
=======================================

What:  Thin pass-through from the services to the database.
Why:   The request-handling logic depends on an interface (NoteRepository),
       not on SQLAlchemy, so it can be exercised against fakes and the storage
       backend can change without touching it.

Repository Inventory:
    - NoteRepository (abstract): list / get / insert / delete / update contract
    - SqlNoteRepository: Async SQLAlchemy implementation over the `notes` table

Repositories do no validation, retrying, caching or error translation.
Whatever the database raises reaches the caller unchanged.
"""
