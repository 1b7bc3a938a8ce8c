import os
import shutil
import subprocess

import pytest
from sqlalchemy import create_engine, inspect, text

from alembic import command
from alembic.config import Config

pytestmark = pytest.mark.e2e

_EXPECTED_TABLES = {
    "users",
    "products",
    "cart_items",
    "orders",
    "order_items",
    "order_tracking",
    "wishlist",
    "reviews",
    "audit_logs",
}


def _docker_available() -> bool:
    if os.getenv("SKIP_DOCKER_TESTS") == "1":
        return False
    if not shutil.which("docker"):
        return False
    try:
        proc = subprocess.run(["docker", "info"], capture_output=True, text=True, timeout=5)
    except (OSError, subprocess.SubprocessError):
        return False
    return proc.returncode == 0


def _service_root() -> str:
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))


@pytest.fixture(scope="module")
def postgres_url():
    if not _docker_available():
        pytest.skip("Docker daemon is not available; skipping e2e tests that require containers")
    from testcontainers.postgres import PostgresContainer

    image = os.getenv("TEST_POSTGRES_IMAGE", "postgres:16-alpine")
    with PostgresContainer(image) as pg:
        url = pg.get_connection_url()
        # Normalize driver to the psycopg2 default used by the app
        if "+" in url:
            parts = url.split("+")
            url = parts[0] + "://" + parts[1].split("//", 1)[1]
        yield url


@pytest.fixture
def alembic_config(postgres_url, monkeypatch):
    monkeypatch.setenv("TEST_DATABASE_URL", postgres_url)
    return Config(os.path.join(_service_root(), "alembic.ini"))


def test_upgrade_creates_schema_and_downgrade_removes_it(alembic_config, postgres_url):
    command.upgrade(alembic_config, "head")
    engine = create_engine(postgres_url)
    try:
        tables = set(inspect(engine).get_table_names())
        assert _EXPECTED_TABLES <= tables

        with engine.connect() as conn:
            columns = {c["name"] for c in inspect(conn).get_columns("audit_logs")}
            assert "metadata" in columns
            sizes_type = conn.execute(
                text("select data_type from information_schema.columns where table_name='products' and column_name='sizes'")
            ).scalar()
            assert sizes_type == "ARRAY"

        command.downgrade(alembic_config, "base")
        remaining = set(inspect(engine).get_table_names())
        assert not (_EXPECTED_TABLES & remaining)
    finally:
        engine.dispose()
