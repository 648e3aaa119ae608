"""
Persistence models.

Plain dataclasses describing rows as they are stored.  They are kept
apart from the Pydantic schemas in ``schemas`` so that the API
representation can change without touching the repository.
"""
