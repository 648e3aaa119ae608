"""
Service layer abstraction.

Each service encapsulates the business logic for a domain and talks
to storage only through a repository interface, so endpoints stay thin
and tests can swap the repository for an in-memory fake.
"""
