import os

# Database Configuration
# A single SQLite file next to the process; tests override with sqlite://:memory:
DB_URL = os.getenv("DATABASE_URL", "sqlite://challenge.db")

# Application Metadata
PROJECT_NAME = "Candy Inventory Service"
VERSION = "1.0.0"
VERSION_STRING = f"{PROJECT_NAME} v{VERSION}"

# Inventory classification
LOW_STOCK_RATIO = float(os.getenv("LOW_STOCK_RATIO", 0.35)) # stock/capacity strictly below this is low stock

# Live inventory feed
STREAM_INTERVAL = float(os.getenv("STREAM_INTERVAL", 5)) # Seconds between two inventory snapshots
FEED_QUEUE_SIZE = int(os.getenv("FEED_QUEUE_SIZE", 4)) # Pending snapshots kept per slow subscriber

# Define all models modules for the ORM
MODELS_MODULES = [
    "app.models.item",
    "app.models.inventory",
    "app.models.distributor",
]
