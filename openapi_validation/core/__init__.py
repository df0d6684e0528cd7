# Core module exports
from openapi_validation.core.config import settings, get_settings, Settings
from openapi_validation.core.logging import (
    configure_logging,
    get_logger,
    bind_context,
    unbind_context,
    rules_logger,
    filter_logger,
    schema_logger,
)
