"""
Endpoint modules.

Each module defines an APIRouter for a single domain.  The routers are
aggregated in ``api/router.py`` and included in the application.
"""
