from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from equivmap.equivalence import EquivalenceRegistry, add_collection_mappers
from equivmap.mapping import MapperConfigurationBuilder
from tests.helpers.orm import Base

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def registry() -> EquivalenceRegistry:
    return EquivalenceRegistry()


@pytest.fixture
def builder(registry: EquivalenceRegistry) -> MapperConfigurationBuilder:
    configuration_builder = MapperConfigurationBuilder()
    add_collection_mappers(configuration_builder, registry=registry)
    return configuration_builder


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    Base.metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, future=True)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()
