import logging

from fastapi import Depends, FastAPI
from souq.core.config import settings
from souq.db.session import db_session, init_db, test_connection
from souq.auth.fallback import show_available_credentials
from souq.repository.document_store import HybridDocumentStore, build_document_store, get_document_store
from souq.service.seed import check_project_health, initialize_project
from souq.routers.user_router import router as user_router
from souq.routers.store_router import router as store_router
from souq.routers.product_router import router as product_router
from souq.routers.category_router import router as category_router
from souq.routers.order_router import router as order_router
from souq.routers.customer_router import router as customer_router
from souq.routers.application_router import router as application_router
from souq.routers.storefront_router import router as storefront_router
from souq.websocket.websocket_router import router as websocket_router
from souq.middleware.auth_middleware import AuthMiddleware

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME)


@app.on_event("startup")
def startup_event():
    logger.info("🚀 Starting server...")
    init_db()
    test_connection()

    if settings.SEED_SAMPLE_DATA:
        with db_session() as db:
            initialize_project(build_document_store(db))

    show_available_credentials()


app.add_middleware(AuthMiddleware)
app.include_router(user_router)
app.include_router(store_router)
app.include_router(product_router)
app.include_router(category_router)
app.include_router(order_router)
app.include_router(customer_router)
app.include_router(application_router)
app.include_router(storefront_router)
app.include_router(websocket_router)


@app.get("/ping")
def ping():
    return {"ping": "pong"}


@app.get("/health")
def health(docs: HybridDocumentStore = Depends(get_document_store)):
    status = check_project_health(docs)
    status["database"] = test_connection()
    return status
