"""Log formatting for the analyzer and its HTTP layer."""

from vet_pathways.logging.formatter import (
    PACKAGE_LOGGER,
    SimpleFormatter,
    StructuredFormatter,
    setup_logging,
)

__all__ = ["PACKAGE_LOGGER", "SimpleFormatter", "StructuredFormatter", "setup_logging"]
