"""
Notebox Backend — Services Layer
==================================

What:  Business logic layer sitting between routes (HTTP) and stores (persistence).
How:   Services receive their collaborators at construction and never import
       the database or ORM models directly.

Service Inventory:
    - IdentityVerifier (abstract): bearer token → verified uid
    - FirebaseIdentityVerifier: Firebase Admin SDK implementation
    - AuthService: token → identity → local user record
    - NoteService: create / list / view / update / delete over the stores
"""
