import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from app.core.db import init_db, close_db, reset_db
from app.api.v1.items import router as items_router
from app.api.v1.inventory import router as inventory_router
from app.api.v1.distributors import router as distributors_router
from app.api.v1.export import router as export_router
from app.api.v1.stream import router as stream_router
from app.core.config import PROJECT_NAME, VERSION, VERSION_STRING
from app.core.exception_handlers import setup_exception_handlers
from app.events.inventory_feed import inventory_feed

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
log = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handles startup and shutdown events."""
    log.info(f"Starting {PROJECT_NAME} v{VERSION}...")
    await init_db() # Connect to DB and apply the schema
    yield
    await inventory_feed.close()
    await close_db()
    log.info(f"{PROJECT_NAME} stopped.")

app = FastAPI(
    title=PROJECT_NAME,
    version=VERSION,
    lifespan=lifespan,
    # Configure API documentation and paths
    docs_url="/docs",
    redoc_url="/redoc"
)

# The bundled browser client calls the API from another origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["content-type"],
)

# Include routers for modular API structure
app.include_router(items_router, prefix="/items", tags=["Items"])
app.include_router(inventory_router, prefix="/inventory", tags=["Inventory"])
app.include_router(distributors_router, prefix="/distributors", tags=["Distributors & Pricing"])
app.include_router(export_router, prefix="/export", tags=["CSV Export"])
app.include_router(stream_router, prefix="/stream", tags=["Live Feed"])


setup_exception_handlers(app)

@app.get("/health", status_code=status.HTTP_200_OK)
async def health_check():
    """Simple health check endpoint."""
    return {"status": "ok", "app_name": PROJECT_NAME}


@app.get("/version")
async def version():
    return {"version": VERSION_STRING}


@app.get("/reset")
async def reset():
    """Restores the reference dataset, discarding every change."""
    await reset_db()
    return {"status": "ok"}
