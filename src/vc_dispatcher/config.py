"""Configuration for the credential verification dispatcher.

All settings come from environment variables. Issuer-specific settings
(e.g. ``JHARSEVA_VERIFICATION_API``) are read by each verifier when it is
constructed, not here.
"""

import os

# =============================================================================
# Server Configuration
# =============================================================================

VC_DISPATCHER_HOST = os.getenv("VC_DISPATCHER_HOST", "0.0.0.0")
VC_DISPATCHER_PORT = int(os.getenv("VC_DISPATCHER_PORT", "3010"))

# "production" suppresses selector diagnostics in the logs
VC_DISPATCHER_ENV = os.getenv("VC_DISPATCHER_ENV", "development")

# =============================================================================
# Verification Configuration
# =============================================================================

# Default timeout for outbound verification calls (seconds)
VC_DISPATCHER_HTTP_TIMEOUT = float(os.getenv("VC_DISPATCHER_HTTP_TIMEOUT", "30.0"))

# Discover issuers once at startup instead of on every catalog request
VC_DISPATCHER_CACHE_CATALOG = (
    os.getenv("VC_DISPATCHER_CACHE_CATALOG", "true").lower() == "true"
)

# =============================================================================
# Logging Configuration
# =============================================================================

VC_DISPATCHER_LOG_LEVEL = os.getenv("VC_DISPATCHER_LOG_LEVEL", "INFO")
VC_DISPATCHER_LOG_FORMAT = os.getenv(
    "VC_DISPATCHER_LOG_FORMAT",
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


def is_production() -> bool:
    """Check whether the dispatcher runs in production mode."""
    return VC_DISPATCHER_ENV.lower() == "production"
