"""CareerDesk Engine — configuration, errors, logging, record sources, table registry."""

from careerdesk.engine.config import get_config, load_config  # noqa: F401
from careerdesk.engine.errors import (  # noqa: F401
    CareerDeskConfigError,
    CareerDeskError,
    CareerDeskIntegrationError,
    CareerDeskObjectNotFoundError,
    CareerDeskValidationError,
)

__all__ = [
    "get_config",
    "load_config",
    "CareerDeskError",
    "CareerDeskConfigError",
    "CareerDeskIntegrationError",
    "CareerDeskObjectNotFoundError",
    "CareerDeskValidationError",
]
