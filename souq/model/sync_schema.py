from typing import Any, Dict, Literal

from pydantic import BaseModel, Field

EventType = Literal[
    "STORE_CREATED",
    "STORE_UPDATED",
    "STORE_CUSTOMIZATION_UPDATED",
    "STORE_DATA_FOR_PREVIEW",
    "PRODUCT_CREATED",
    "PRODUCT_UPDATED",
    "PRODUCT_DELETED",
    "CATEGORY_CREATED",
    "CATEGORY_UPDATED",
    "CATEGORY_DELETED",
    "STORE_APPLICATION_SUBMITTED",
    "STORE_APPLICATION_APPROVED",
    "STORE_APPLICATION_REJECTED",
    "ORDER_CREATED",
    "ORDER_STATUS_UPDATED",
    "CUSTOMER_UPDATED",
]

EVENT_CHANNELS: Dict[str, str] = {
    "STORE_CREATED": "stores",
    "STORE_UPDATED": "stores",
    "STORE_CUSTOMIZATION_UPDATED": "stores",
    "STORE_DATA_FOR_PREVIEW": "stores",
    "PRODUCT_CREATED": "products",
    "PRODUCT_UPDATED": "products",
    "PRODUCT_DELETED": "products",
    "CATEGORY_CREATED": "categories",
    "CATEGORY_UPDATED": "categories",
    "CATEGORY_DELETED": "categories",
    "STORE_APPLICATION_SUBMITTED": "applications",
    "STORE_APPLICATION_APPROVED": "applications",
    "STORE_APPLICATION_REJECTED": "applications",
    "ORDER_CREATED": "orders",
    "ORDER_STATUS_UPDATED": "orders",
    "CUSTOMER_UPDATED": "customers",
}


class SyncEvent(BaseModel):
    type: EventType
    channel: str = ""
    seq: int = 0
    timestamp: int = 0
    payload: Dict[str, Any] = Field(default_factory=dict)

    def message(self) -> dict:
        data = self.model_dump(mode="json")
        return {
            "type": self.type,
            "channel": self.channel,
            "seq": self.seq,
            "timestamp": self.timestamp,
            **data["payload"],
        }
