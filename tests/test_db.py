"""
Tests for src/db.py — engine construction, schema creation, seeding.
"""
import pytest
from sqlalchemy import select, text
from sqlalchemy.pool import StaticPool

from src.db import create_db_engine, data_table, engine_resource, init_schema, seed
from src.errors import SeedError


class TestCreateEngine:

    def test_sqlite_uses_static_pool(self):
        engine = create_db_engine("sqlite://")
        try:
            assert isinstance(engine.pool, StaticPool)
        finally:
            engine.dispose()

    def test_resource_disposes_engine(self):
        gen = engine_resource("sqlite://")
        engine = next(gen)
        with engine.connect() as conn:
            assert conn.execute(text("SELECT 1")).scalar() == 1
        with pytest.raises(StopIteration):
            next(gen)


class TestInitSchema:

    def test_creates_data_table(self, empty_engine):
        with empty_engine.connect() as conn:
            assert conn.execute(select(data_table)).all() == []

    def test_is_repeatable(self, empty_engine):
        """init runs before every seed step, so a second call must not fail."""
        init_schema(empty_engine)


class TestSeed:

    def test_writes_fixed_rows(self, empty_engine, seed_rows):
        written = seed(empty_engine)
        assert written == len(seed_rows)
        with empty_engine.connect() as conn:
            rows = conn.execute(
                select(data_table.c.id, data_table.c.name).order_by(data_table.c.id)
            ).all()
        assert [{"id": r.id, "name": r.name} for r in rows] == seed_rows

    def test_custom_rows(self, empty_engine):
        assert seed(empty_engine, [(10, "ten")]) == 1

    def test_empty_rows_is_noop(self, empty_engine):
        assert seed(empty_engine, []) == 0

    def test_second_seed_fails(self, engine):
        """Seeding is a once-per-fresh-database step."""
        with pytest.raises(SeedError):
            seed(engine)

    def test_missing_schema_raises_seed_error(self):
        engine = create_db_engine("sqlite://")
        try:
            with pytest.raises(SeedError):
                seed(engine)
        finally:
            engine.dispose()
