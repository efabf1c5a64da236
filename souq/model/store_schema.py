from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from souq.model.base_schema import DocumentModel

StoreStatus = Literal["active", "inactive", "pending"]


class StoreColors(DocumentModel):
    primary: str = "#2563eb"
    secondary: str = "#64748b"
    background: str = "#ffffff"
    text: str = "#1e293b"
    accent: str = "#3b82f6"
    header_background: str = "#ffffff"
    footer_background: str = "#f8fafc"
    card_background: str = "#ffffff"
    border_color: str = "#e5e7eb"


class StoreFonts(DocumentModel):
    heading: str = "Cairo"
    body: str = "Cairo"


class StoreLayout(DocumentModel):
    header_style: Literal["modern", "classic", "minimal"] = "modern"
    footer_style: Literal["simple", "detailed", "compact"] = "detailed"
    product_grid_columns: int = Field(4, ge=1, le=6)


class HeroText(DocumentModel):
    title: str
    subtitle: str = ""
    button_text: str = "Shop now"


class StoreHomepage(DocumentModel):
    show_hero_slider: bool = True
    show_featured_products: bool = True
    show_categories: bool = True
    show_newsletter: bool = True
    show_testimonials: bool = False
    show_stats: bool = True
    hero_images: List[str] = Field(default_factory=list)
    hero_texts: List[HeroText] = Field(default_factory=list)
    sections_order: List[str] = Field(default_factory=lambda: ["hero", "categories", "featured", "stats"])


class StorePages(DocumentModel):
    enable_blog: bool = False
    enable_reviews: bool = True
    enable_wishlist: bool = True
    enable_compare: bool = False
    enable_faq: bool = True
    enable_about_us: bool = True
    enable_contact_us: bool = True


class StoreBranding(DocumentModel):
    logo: str = ""
    favicon: str = ""
    show_powered_by: bool = True


class StoreCustomization(DocumentModel):
    colors: StoreColors = Field(default_factory=StoreColors)
    fonts: StoreFonts = Field(default_factory=StoreFonts)
    layout: StoreLayout = Field(default_factory=StoreLayout)
    homepage: StoreHomepage = Field(default_factory=StoreHomepage)
    pages: StorePages = Field(default_factory=StorePages)
    branding: StoreBranding = Field(default_factory=StoreBranding)


class ShippingZone(DocumentModel):
    id: str
    name: str
    cities: List[str] = Field(default_factory=list)
    cost: float = 0
    estimated_days: str = ""


class ShippingSettings(DocumentModel):
    enabled: bool = True
    free_shipping_threshold: float = 200
    default_cost: float = 25
    zones: List[ShippingZone] = Field(default_factory=list)


class PaymentSettings(DocumentModel):
    cash_on_delivery: bool = True
    bank_transfer: bool = False
    credit_card: bool = False
    paypal: bool = False
    stripe: bool = False


class TaxSettings(DocumentModel):
    enabled: bool = False
    rate: float = Field(0, ge=0, le=100)
    include_in_price: bool = False


class NotificationSettings(DocumentModel):
    email_notifications: bool = False
    sms_notifications: bool = False
    push_notifications: bool = False


class StoreSettings(DocumentModel):
    currency: str = "SAR"
    language: str = "ar"
    timezone: str = "Asia/Riyadh"
    shipping: ShippingSettings = Field(default_factory=ShippingSettings)
    payment: PaymentSettings = Field(default_factory=PaymentSettings)
    taxes: TaxSettings = Field(default_factory=TaxSettings)
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)


class StoreCreate(DocumentModel):
    name: str
    description: str = ""
    logo: Optional[str] = None
    cover: Optional[str] = None
    subdomain: str
    owner_id: str
    template: str = "modern"
    customization: StoreCustomization = Field(default_factory=StoreCustomization)
    settings: StoreSettings = Field(default_factory=StoreSettings)
    status: StoreStatus = "active"


class Store(StoreCreate):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class StoreUpdate(DocumentModel):
    name: Optional[str] = None
    description: Optional[str] = None
    logo: Optional[str] = None
    cover: Optional[str] = None
    subdomain: Optional[str] = None
    template: Optional[str] = None
    customization: Optional[StoreCustomization] = None
    settings: Optional[StoreSettings] = None
    status: Optional[StoreStatus] = None


class MerchantStats(DocumentModel):
    total_products: int = 0
    total_orders: int = 0
    pending_orders: int = 0
    total_revenue: float = 0
    monthly_revenue: float = 0
    today_orders: int = 0
