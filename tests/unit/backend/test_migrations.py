"""
Alembic migrations build the same schema as the models.
"""

import os

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from hms.db.database import Base
import hms.models  # noqa: F401

ALEMBIC_INI = os.path.abspath(
    os.path.join(os.path.dirname(__file__), '..', '..', '..', 'backend', 'alembic.ini')
)


@pytest.fixture
def alembic_config(tmp_path):
    url = f"sqlite:///{tmp_path / 'migrations.db'}"
    cfg = Config(ALEMBIC_INI)
    cfg.set_main_option("sqlalchemy.url", url)
    cfg.attributes["configure_logger"] = False
    return cfg, url


class TestMigrations:

    def test_upgrade_creates_every_model_table(self, alembic_config):
        cfg, url = alembic_config

        command.upgrade(cfg, "head")

        engine = create_engine(url)
        try:
            tables = set(inspect(engine).get_table_names())
        finally:
            engine.dispose()
        assert set(Base.metadata.tables) <= tables
        assert "alembic_version" in tables

    def test_constraint_names_match_models(self, alembic_config):
        cfg, url = alembic_config
        command.upgrade(cfg, "head")

        engine = create_engine(url)
        try:
            inspector = inspect(engine)
            fk_names = {fk["name"] for fk in inspector.get_foreign_keys("appointments")}
            unique_names = {uc["name"] for uc in inspector.get_unique_constraints("doctor_departments")}
            check_names = {ck["name"] for ck in inspector.get_check_constraints("wards")}
            index_names = {ix["name"] for ix in inspector.get_indexes("appointments")}
        finally:
            engine.dispose()

        assert {"fk_appointment_patient", "fk_appointment_doctor", "fk_appointment_staff"} <= fk_names
        assert "unique_doctor_department" in unique_names
        assert {"chk_total_beds", "chk_available_beds", "chk_daily_rate", "chk_ward_type"} <= check_names
        assert "ix_appointments_patient_id" in index_names

    def test_downgrade_removes_everything(self, alembic_config):
        cfg, url = alembic_config
        command.upgrade(cfg, "head")

        command.downgrade(cfg, "base")

        engine = create_engine(url)
        try:
            tables = set(inspect(engine).get_table_names())
        finally:
            engine.dispose()
        assert tables == {"alembic_version"}
