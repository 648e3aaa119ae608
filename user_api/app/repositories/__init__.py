"""
Repository layer.

Repositories translate domain calls into SQL against the shared
database handle and return stored records.
"""
