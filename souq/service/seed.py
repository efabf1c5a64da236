import logging
from datetime import timedelta

from souq.model.application_schema import (
    ApplicationColors,
    ApplicationCustomization,
    MerchantData,
    StoreConfig,
)
from souq.model.category_schema import CategoryCreate
from souq.model.customer_schema import CustomerCreate
from souq.model.product_schema import ProductCreate
from souq.model.store_schema import Store, StoreCreate, StoreSettings, TaxSettings
from souq.repository import (
    application_repository,
    category_repository,
    customer_repository,
    product_repository,
    store_repository,
)
from souq.repository.document_store import STORE_APPLICATIONS, STORES, HybridDocumentStore, utcnow
from souq.service.approval import default_customization

logger = logging.getLogger(__name__)

SAMPLE_CATEGORIES = [
    {"name": "Electronics", "description": "Devices and gadgets", "sort": 1},
    {"name": "Fashion", "description": "Clothing, shoes and accessories", "sort": 2},
    {"name": "Home & Garden", "description": "Home tools and decor", "sort": 3},
    {"name": "Books", "description": "Books and references", "sort": 4},
]

SAMPLE_PRODUCTS = [
    {
        "name": "Smartphone Pro",
        "description": "High-end smartphone with an excellent camera",
        "price": 1999,
        "original_price": 2299,
        "category": "Electronics",
        "sku": "PHONE-001",
        "stock": 15,
        "specifications": {"Screen": "6.7 inch AMOLED", "Storage": "256GB", "Camera": "108MP"},
        "tags": ["phone", "smart", "camera"],
        "rating": 4.5,
        "review_count": 127,
        "featured": True,
    },
    {
        "name": "Cotton Shirt",
        "description": "Pure cotton shirt with a modern cut",
        "price": 149,
        "category": "Fashion",
        "sku": "SHIRT-001",
        "stock": 30,
        "specifications": {"Material": "100% cotton", "Sizes": "S, M, L, XL, XXL"},
        "tags": ["shirt", "cotton"],
        "rating": 4.2,
        "review_count": 89,
        "featured": True,
    },
    {
        "name": "Smart LED Lamp",
        "description": "App-controlled LED lamp with adjustable colors",
        "price": 89,
        "category": "Home & Garden",
        "sku": "LAMP-001",
        "stock": 25,
        "specifications": {"Power": "12W", "Control": "Wi-Fi + Bluetooth"},
        "tags": ["lamp", "smart", "LED"],
        "rating": 4.7,
        "review_count": 45,
        "featured": False,
    },
]

SAMPLE_CUSTOMERS = [
    {"name": "Ahmed Mohammed", "email": "ahmed@example.com", "phone": "+966501234567", "total_orders": 5, "total_spent": 2850},
    {"name": "Fatima Saad", "email": "fatima@example.com", "phone": "+966507654321", "total_orders": 3, "total_spent": 1200},
    {"name": "Sara Khaled", "email": "sara@example.com", "phone": "+966509876543", "total_orders": 2, "total_spent": 580, "is_active": False},
]


def initialize_sample_data(docs: HybridDocumentStore, store_id: str):
    logger.info("🔧 Initializing sample data for store: %s", store_id)

    for category in SAMPLE_CATEGORIES:
        category_repository.create_category(docs, CategoryCreate(store_id=store_id, **category))

    for product in SAMPLE_PRODUCTS:
        product_repository.create_product(
            docs, ProductCreate(store_id=store_id, images=["/placeholder-product.jpg"], **product)
        )

    for days_ago, customer in enumerate(SAMPLE_CUSTOMERS, start=1):
        customer_repository.create_customer(
            docs,
            CustomerCreate(store_id=store_id, last_order_date=utcnow() - timedelta(days=days_ago * 3), **customer),
        )

    logger.info("✅ Sample data initialized")


def create_sample_store(docs: HybridDocumentStore) -> Store:
    logger.info("🏪 Creating sample store...")
    return store_repository.create_store(
        docs,
        StoreCreate(
            name="Sample Store",
            description="A sample store to showcase the platform",
            subdomain="sample-store",
            owner_id="sample_merchant_123",
            template="modern",
            customization=default_customization("Sample Store"),
            settings=StoreSettings(taxes=TaxSettings(enabled=True, rate=15)),
        ),
    )


def initialize_project(docs: HybridDocumentStore) -> bool:
    """Seed sample data when both stores and applications are empty. Returns True when seeded."""
    logger.info("🚀 Initializing project...")
    store_count = docs.count(STORES)
    application_count = docs.count(STORE_APPLICATIONS)
    logger.info("📊 Existing data: stores=%d applications=%d", store_count, application_count)

    if store_count or application_count:
        logger.info("✅ Project already has data, skipping initialization")
        return False

    store = create_sample_store(docs)
    initialize_sample_data(docs, store.id)

    logger.info("📝 Creating sample application...")
    application_repository.submit_application(
        docs,
        "sample_merchant_456",
        MerchantData(
            first_name="Ahmed",
            last_name="Mohammed",
            email="ahmed@example.com",
            phone="+966501234567",
            city="Riyadh",
            business_name="Ahmed Trading",
            business_type="e-commerce",
        ),
        StoreConfig(
            template="modern",
            customization=ApplicationCustomization(
                store_name="Ahmed Store",
                store_description="High quality products",
                colors=ApplicationColors(primary="#16a34a", secondary="#6b7280"),
            ),
        ),
    )
    logger.info("✅ Project initialization completed successfully")
    return True


def check_project_health(docs: HybridDocumentStore) -> dict:
    try:
        stores = docs.count(STORES)
        stores_source = docs.last_source
        applications = docs.count(STORE_APPLICATIONS)
    except Exception as e:
        logger.error("❌ Database status check failed: %s", e)
        return {"firebase": False, "stores": 0, "applications": 0, "error": str(e)}

    return {
        "firebase": docs.primary_enabled and stores_source == docs.primary.name and docs.last_source == docs.primary.name,
        "source": docs.last_source,
        "stores": stores,
        "applications": applications,
    }
