"""
Inventory sync schemas — error taxonomy, results, statuses and alerts.
"""
from enum import Enum
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel


T = TypeVar("T")


class SyncErrorType(str, Enum):
    AUTH_REVOKED = "auth_revoked"
    STORE_UNREACHABLE = "store_unreachable"
    RATE_LIMITED = "rate_limited"
    PARTIAL_FAILURE = "partial_failure"
    TRANSIENT = "transient"
    UNKNOWN = "unknown"


class PartnerSyncStatus(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    FAILED = "failed"


class SyncLogStatus(str, Enum):
    STARTED = "started"
    COMPLETED = "completed"
    FAILED = "failed"


class CriticalErrorType(str, Enum):
    TOKEN_REVOKED = "token_revoked"
    STORE_UNREACHABLE = "store_unreachable"
    HIGH_FAILURE_RATE = "high_failure_rate"
    CONSECUTIVE_FAILURES = "consecutive_failures"
    OWNER_STORE_DISCONNECTED = "owner_store_disconnected"


class TokenStatus(str, Enum):
    CONNECTED = "connected"
    EXPIRED = "expired"
    ERROR = "error"
    NOT_CONFIGURED = "not_configured"


# -- Collaborator records --------------------------------------------------

class ProductMapping(BaseModel):
    """Active link between a partner variant and an owner-store variant."""
    partner_shop: str
    partner_variant_id: str
    my_variant_id: str


class PartnerCredential(BaseModel):
    id: str
    shop: str
    access_token: Optional[str] = None
    is_active: bool = True
    is_deleted: bool = False

    @property
    def can_sync(self) -> bool:
        return self.is_active and not self.is_deleted and bool(self.access_token)


class OwnerStoreCredential(BaseModel):
    status: TokenStatus
    shop: Optional[str] = None
    access_token: Optional[str] = None
    location_id: Optional[str] = None
    expires_at: Optional[str] = None
    error: Optional[str] = None


# -- Engine values ---------------------------------------------------------

class RetryOutcome(BaseModel, Generic[T]):
    """
    Final outcome of a retried operation.

    Either data is set and error is None, or error is set and data is None.
    """
    data: Optional[T] = None
    error: Optional[str] = None
    http_status: Optional[int] = None
    error_type: Optional[SyncErrorType] = None
    retry_count: int = 0


class InventoryUpdate(BaseModel):
    inventory_item_id: str
    quantity: int


class FetchInventoryResult(BaseModel):
    inventory: dict[str, int] = {}
    errors: List[str] = []
    error_type: Optional[SyncErrorType] = None


class ResolveInventoryItemsResult(BaseModel):
    item_map: dict[str, str] = {}
    errors: List[str] = []


class WriteInventoryResult(BaseModel):
    updated: int = 0
    failed: int = 0
    errors: List[str] = []


class PartnerSyncResult(BaseModel):
    partner_shop: str
    success: bool = True
    items_processed: int = 0
    items_updated: int = 0
    items_failed: int = 0
    items_skipped: int = 0
    errors: List[str] = []
    # Last classified fetch error, used for critical failure detection
    error_type: Optional[SyncErrorType] = None


class InventorySyncResult(BaseModel):
    success: bool = True
    partners_processed: int = 0
    total_items_processed: int = 0
    total_items_updated: int = 0
    total_items_failed: int = 0
    total_items_skipped: int = 0
    errors: List[str] = []
    partner_results: List[PartnerSyncResult] = []

    def add_partner_result(self, result: PartnerSyncResult) -> None:
        self.partners_processed += 1
        self.total_items_processed += result.items_processed
        self.total_items_updated += result.items_updated
        self.total_items_failed += result.items_failed
        self.total_items_skipped += result.items_skipped
        self.errors.extend(result.errors)
        self.partner_results.append(result)
        if not result.success:
            self.success = False


class CriticalSyncError(BaseModel):
    """Alert-worthy condition. Never persisted."""
    type: CriticalErrorType
    partner_shop: str
    message: str
    details: str = ""
    failure_rate: Optional[float] = None
    consecutive_failures: Optional[int] = None


class SendEmailResult(BaseModel):
    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None


class InventorySyncSummary(BaseModel):
    """Response body of the cron trigger endpoint."""
    success: bool
    partners_processed: int
    total_items_processed: int
    total_items_updated: int
    total_items_failed: int
    total_items_skipped: int
    errors: List[str]

    @classmethod
    def from_result(cls, result: InventorySyncResult) -> "InventorySyncSummary":
        return cls.model_validate(result.model_dump(exclude={"partner_results"}))
