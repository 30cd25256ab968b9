from app.schemas.base import (
    SalesRow,
    SummaryResponse,
    SummaryRow,
    UploadResponse,
    VoucherRecord,
)

__all__ = [
    "SalesRow",
    "SummaryResponse",
    "SummaryRow",
    "UploadResponse",
    "VoucherRecord",
]
