from advisory.client import (
    APPROVED_VERDICT,
    AdvisoryClient,
    AdvisoryError,
    is_recommended,
    parse_days,
)

__all__ = [
    "APPROVED_VERDICT",
    "AdvisoryClient",
    "AdvisoryError",
    "is_recommended",
    "parse_days",
]
