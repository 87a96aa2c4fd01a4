"""
Scenario persistence — one row per scenario, the full scenario stored as JSON.

The engine never touches the store: callers load a Scenario, project it, and
save edited scenarios back separately.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import Column, String, Text, create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from core.config import StoreConfig
from core.errors import ScenarioStoreError
from core.schema import Scenario

from .payload import scenario_from_json, scenario_to_json

logger = logging.getLogger(__name__)

Base = declarative_base()


class ScenarioRecord(Base):
    __tablename__ = "scenarios"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    data_json = Column(Text, nullable=False)
    updated_at_iso = Column(String, nullable=False)


@dataclass(frozen=True)
class ScenarioListing:
    id: str
    name: str
    updated_at_iso: str


class ScenarioStore:
    """List, load, save (upsert by id) and delete scenarios."""

    def __init__(self, config: Optional[StoreConfig] = None):
        self.config = config or StoreConfig.from_env()
        url = self.config.database_url
        connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
        self.engine = create_engine(url, echo=self.config.echo, connect_args=connect_args)
        Base.metadata.create_all(self.engine)
        self._session = sessionmaker(bind=self.engine, expire_on_commit=False)

    def list(self) -> List[ScenarioListing]:
        """Saved scenarios, most recently updated first."""
        try:
            with self._session() as session:
                records = (
                    session.query(ScenarioRecord)
                    .order_by(ScenarioRecord.updated_at_iso.desc())
                    .all()
                )
                return [ScenarioListing(r.id, r.name, r.updated_at_iso) for r in records]
        except SQLAlchemyError as exc:
            logger.error("Listing scenarios failed: %s", exc)
            raise ScenarioStoreError("Could not list scenarios.", exc) from exc

    def load(self, scenario_id: str) -> Optional[Scenario]:
        try:
            with self._session() as session:
                record = session.get(ScenarioRecord, scenario_id)
                data_json = record.data_json if record is not None else None
        except SQLAlchemyError as exc:
            logger.error("Loading scenario %s failed: %s", scenario_id, exc)
            raise ScenarioStoreError(f"Could not load scenario {scenario_id}.", exc) from exc
        if data_json is None:
            return None
        return scenario_from_json(data_json)

    def save(self, scenario: Scenario) -> None:
        record = ScenarioRecord(
            id=scenario.id,
            name=scenario.name,
            data_json=scenario_to_json(scenario),
            updated_at_iso=scenario.updated_at_iso,
        )
        try:
            with self._session.begin() as session:
                session.merge(record)
        except SQLAlchemyError as exc:
            logger.error("Saving scenario %s failed: %s", scenario.id, exc)
            raise ScenarioStoreError(f"Could not save scenario {scenario.id}.", exc) from exc
        logger.info("Saved scenario %s (%s)", scenario.id, scenario.name)

    def delete(self, scenario_id: str) -> None:
        """Deleting an unknown id is a no-op."""
        try:
            with self._session.begin() as session:
                record = session.get(ScenarioRecord, scenario_id)
                if record is not None:
                    session.delete(record)
        except SQLAlchemyError as exc:
            logger.error("Deleting scenario %s failed: %s", scenario_id, exc)
            raise ScenarioStoreError(f"Could not delete scenario {scenario_id}.", exc) from exc
        logger.info("Deleted scenario %s", scenario_id)

    def close(self) -> None:
        self.engine.dispose()
