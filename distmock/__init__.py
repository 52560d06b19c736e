"""In-memory content-distribution API used as a test double.

``create_app`` builds the FastAPI application around a ``Store``;
``MockServer`` runs it on a background thread for client tests.
"""

from .main import create_app
from .server import MockServer
from .seed import seed_sample_data
from .store import Store

__all__ = ["create_app", "MockServer", "Store", "seed_sample_data"]
