"""Application wiring: environment, logging and default collaborators."""
import logging
import os
from typing import Optional

from dotenv import load_dotenv

from dept_analytics.catalog import DEFAULT_CATALOG, DepartmentCatalog, load_catalog_file
from dept_analytics.store import FeedbackSnapshotStore

# Load environment variables from .env file
load_dotenv()

# Set up logging
logging_level = os.environ.get("ANALYTICS_LOG_LEVEL", "INFO")
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging_level
)
logger = logging.getLogger(__name__)


def build_catalog(path: Optional[str] = None) -> DepartmentCatalog:
    """Return the catalog at *path* (or ``ANALYTICS_CATALOG_FILE``), else the seed catalog.

    Raises
    ------
    CatalogError
        If a catalog file is configured but cannot be loaded.
    """
    path = path or os.getenv("ANALYTICS_CATALOG_FILE")
    if not path:
        return DEFAULT_CATALOG
    logger.info("Loading department catalog from %s", path)
    return load_catalog_file(path)


def build_store(path: Optional[str] = None) -> FeedbackSnapshotStore:
    """Return a snapshot store filled from *path* (or ``ANALYTICS_FEEDBACK_FILE``).

    An empty store is returned when no file is configured.

    Raises
    ------
    FeedbackSourceError
        If a feedback file is configured but cannot be loaded.
    """
    store = FeedbackSnapshotStore()
    path = path or os.getenv("ANALYTICS_FEEDBACK_FILE")
    if path:
        store.load(path)
    else:
        logger.warning("No feedback file configured; starting with an empty snapshot.")
    return store
