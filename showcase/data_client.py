"""
Data-access client for the showcase store.

A thin pass-through over two external collaborators:

- the relational store (``vehicles``, ``vehicle_photos``, ``customer_inquiries``)
  reached through SQLAlchemy, one short-lived session per call
- the object store bucket holding vehicle photos, reached through a
  ``StorageBackend``

There is no transaction spanning two calls. Driver failures are re-raised as
``StoreError`` with the underlying message so callers can show it.

The client is optional: ``get_data_client()`` returns ``None`` when the
credential pair is not configured and every caller must go through
``require_client()`` before touching it.
"""
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Type
import logging
import threading

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from showcase.config import get_settings
from showcase.database import Base, create_session_factory
from showcase.errors import StoreError, StoreUnavailableError
from showcase.models.models import Vehicle, VehiclePhoto, CustomerInquiry
from showcase.storage.backend import StorageBackend, get_storage_backend

logger = logging.getLogger(__name__)

TABLES: Dict[str, Type[Base]] = {
    "vehicles": Vehicle,
    "vehicle_photos": VehiclePhoto,
    "customer_inquiries": CustomerInquiry,
}


def _describe(error: Exception) -> str:
    """Best human-readable message for a driver error."""
    orig = getattr(error, "orig", None)
    return str(orig or error).strip() or error.__class__.__name__


class DataClient:
    """Generic select/insert/update/delete plus bucket upload/remove/public URL."""

    def __init__(
        self,
        session_factory: sessionmaker,
        storage: StorageBackend,
        public_base_url: str,
        bucket: str = "vehicle-photos",
    ):
        self._session_factory = session_factory
        self._storage = storage
        self.public_base_url = public_base_url.rstrip("/")
        self.bucket = bucket

    # ─── Relational store ─────────────────────────────────────────────

    @contextmanager
    def _session(self) -> Iterator[Session]:
        db = self._session_factory()
        try:
            yield db
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Store operation failed: {e}")
            raise StoreError(_describe(e)) from e
        finally:
            db.close()

    @staticmethod
    def _model(table: str) -> Type[Base]:
        try:
            return TABLES[table]
        except KeyError:
            raise ValueError(f"Unknown table: {table}")

    def select(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        exclude: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Any]:
        """
        Select rows matching every filter.

        A list/tuple/set filter value means "column IN values". ``exclude``
        adds "column != value" conditions.
        """
        model = self._model(table)
        with self._session() as db:
            query = db.query(model)
            for column, value in (filters or {}).items():
                attr = getattr(model, column)
                if isinstance(value, (list, tuple, set)):
                    query = query.filter(attr.in_(list(value)))
                else:
                    query = query.filter(attr == value)
            for column, value in (exclude or {}).items():
                query = query.filter(getattr(model, column) != value)
            if order_by:
                attr = getattr(model, order_by)
                query = query.order_by(attr.desc() if descending else attr.asc())
            if limit:
                query = query.limit(limit)
            return query.all()

    def get(self, table: str, key: str) -> Optional[Any]:
        model = self._model(table)
        with self._session() as db:
            return db.get(model, key)

    def insert(self, table: str, values: Dict[str, Any]) -> Any:
        model = self._model(table)
        with self._session() as db:
            row = model(**values)
            db.add(row)
            db.flush()
            return row

    def update(self, table: str, key: str, values: Dict[str, Any]) -> Optional[Any]:
        """Overwrite the given columns on one row. Returns None if no such row."""
        model = self._model(table)
        with self._session() as db:
            row = db.get(model, key)
            if row is None:
                return None
            for column, value in values.items():
                setattr(row, column, value)
            db.flush()
            return row

    def delete(self, table: str, key: str) -> bool:
        """Delete one row by key. Returns False if it did not exist."""
        model = self._model(table)
        with self._session() as db:
            row = db.get(model, key)
            if row is None:
                return False
            db.delete(row)
            return True

    # ─── Object storage ───────────────────────────────────────────────

    def _storage_key(self, name: str) -> str:
        return f"{self.bucket}/{name.lstrip('/')}"

    async def upload(self, name: str, data: bytes) -> None:
        """Upload (with overwrite) an object into the photo bucket."""
        try:
            await self._storage.store(self._storage_key(name), data)
        except (OSError, ValueError) as e:
            logger.error(f"Storage upload failed for {name}: {e}")
            raise StoreError(str(e) or e.__class__.__name__) from e

    async def remove(self, names: List[str]) -> None:
        """Delete objects by name. Missing objects are not an error."""
        for name in names:
            try:
                await self._storage.delete(self._storage_key(name))
            except (OSError, ValueError) as e:
                logger.error(f"Storage delete failed for {name}: {e}")
                raise StoreError(str(e) or e.__class__.__name__) from e

    def public_url(self, name: str) -> str:
        return f"{self.public_base_url}/{self.bucket}/{name.lstrip('/')}"

    def object_name(self, url: str) -> str:
        """Inverse of ``public_url``; falls back to the last path segment."""
        prefix = f"{self.public_base_url}/{self.bucket}/"
        if url.startswith(prefix):
            return url[len(prefix):]
        return url.rstrip("/").split("/")[-1]


def require_client(client: Optional[DataClient]) -> DataClient:
    """Every data operation starts here: absent client → stable refresh message."""
    if client is None:
        raise StoreUnavailableError()
    return client


# Singleton data client instance (None when the store is not configured)
_data_client: Optional[DataClient] = None
# FastAPI resolves this dependency on threadpool workers
_data_client_lock = threading.Lock()


def get_data_client() -> Optional[DataClient]:
    """Get the configured data client, or None if the credential pair is missing."""
    global _data_client

    if _data_client is not None:
        return _data_client

    with _data_client_lock:
        if _data_client is None:
            settings = get_settings()

            if not settings.store_configured:
                logger.warning("Store environment variables not found; data operations are disabled")
                return None

            session_factory = create_session_factory(settings.database_url)
            # No-op for tables Alembic already created
            Base.metadata.create_all(bind=session_factory.kw["bind"])

            _data_client = DataClient(
                session_factory=session_factory,
                storage=get_storage_backend(),
                public_base_url=settings.storage_public_url,
                bucket=settings.photo_bucket,
            )
            logger.info("Data client initialized")

    return _data_client
