"""
Portfolio API — Services Layer
===============================

Service Inventory:
    - ProjectService: CRUD on the `projects` table
    - BookingService: insert / list / status update on the `bookings` table
    - IdentityService (abstract) + SupabaseIdentityService: bearer token verification
    - MediaSignatureService: signed upload parameters for the media host

Services take their collaborators as arguments (the DB session per call,
HTTP clients and credentials at construction) and hold no request state.
"""
