from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from souq.model.base_schema import DocumentModel
from souq.model.store_schema import Store

ApplicationStatus = Literal["pending", "approved", "rejected"]


class MerchantData(DocumentModel):
    first_name: str
    last_name: str = ""
    email: str
    phone: str = ""
    city: str = ""
    business_name: str
    business_type: str = ""


class ApplicationColors(DocumentModel):
    primary: str = "#2563eb"
    secondary: str = "#64748b"
    background: str = "#ffffff"


class ApplicationCustomization(DocumentModel):
    store_name: str = ""
    store_description: str = ""
    colors: ApplicationColors = Field(default_factory=ApplicationColors)


class StoreConfig(DocumentModel):
    template: str = "modern"
    customization: ApplicationCustomization = Field(default_factory=ApplicationCustomization)


class ApplicationSubmit(DocumentModel):
    merchant_id: Optional[str] = None
    merchant_data: MerchantData
    store_config: StoreConfig = Field(default_factory=StoreConfig)


class StoreApplication(DocumentModel):
    id: str
    merchant_id: str
    merchant_data: MerchantData
    store_config: StoreConfig
    status: ApplicationStatus = "pending"
    submitted_at: Optional[datetime] = None
    reviewed_at: Optional[datetime] = None
    reviewed_by: Optional[str] = None
    rejection_reason: Optional[str] = None
    store_id: Optional[str] = None


class ApplicationRejection(DocumentModel):
    reason: str = Field(min_length=1)


class ApplicationStats(DocumentModel):
    total: int = 0
    pending: int = 0
    approved: int = 0
    rejected: int = 0


class ApprovalResult(DocumentModel):
    application: StoreApplication
    store: Store
