"""HTTP middleware: request ID, correlation ID, tenant context.

Applied in eventops.main; order matters (first added = innermost).
"""

from eventops.middleware.correlation_id import CorrelationIDMiddleware
from eventops.middleware.request_id import RequestIDMiddleware
from eventops.middleware.tenant_context import TenantContextMiddleware

__all__ = [
    "CorrelationIDMiddleware",
    "RequestIDMiddleware",
    "TenantContextMiddleware",
]
