"""
Shared module for infrastructure and cross-cutting concerns of the REST API.

STRUCTURE:
- shared.security: Staff JWT verification, current_user_context
- shared.infrastructure: Database sessions, correlation ids, Redis events
- shared.config: Settings, structured logging, status constants
- shared.utils: HTTP exceptions, health check helpers

IMPORT EXAMPLES:
    from shared.security.auth import current_user_context
    from shared.infrastructure.db import get_db, safe_commit
    from shared.config.settings import settings
    from shared.config.constants import BookingStatus, TicketStatus
    from shared.utils.exceptions import NotFoundError, AllocationConflictError
"""
