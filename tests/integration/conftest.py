"""Fixtures for round-trip tests against a real MySQL server."""

from __future__ import annotations

import os
import shutil
import subprocess

import pytest


def _get_podman_socket() -> str | None:
    """Get the Podman machine socket path, if available."""
    try:
        result = subprocess.run(
            ["podman", "machine", "inspect", "--format",
             "{{.ConnectionInfo.PodmanSocket.Path}}"],
            capture_output=True, text=True, check=True, timeout=5,
        )
        sock = result.stdout.strip()
        if sock and os.path.exists(sock):
            return sock
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired,
            FileNotFoundError):
        pass
    return None

def _container_runtime_available() -> bool:
    """Check if Docker or Podman is available as a container runtime."""
    for cmd in ["docker", "podman"]:
        if shutil.which(cmd):
            try:
                subprocess.run(
                    [cmd, "info"], capture_output=True, check=True, timeout=10,
                )
                return True
            except (subprocess.CalledProcessError, subprocess.TimeoutExpired,
                    FileNotFoundError):
                continue
    return False

def _configure_testcontainers_for_podman() -> None:
    """Configure testcontainers to work with Podman."""
    if not shutil.which("podman"):
        return
    # Ryuk (resource reaper) is not always supported by Podman
    os.environ.setdefault("TESTCONTAINERS_RYUK_DISABLED", "true")
    if "DOCKER_HOST" not in os.environ:
        sock = _get_podman_socket()
        if sock:
            os.environ["DOCKER_HOST"] = f"unix://{sock}"


CONTAINER_RUNTIME_AVAILABLE = _container_runtime_available()

if CONTAINER_RUNTIME_AVAILABLE:
    _configure_testcontainers_for_podman()


@pytest.fixture(scope="session")
def mysql_container():
    if not CONTAINER_RUNTIME_AVAILABLE:
        pytest.skip("No container runtime (Docker/Podman) available")
    from testcontainers.mysql import MySqlContainer
    with MySqlContainer("mysql:8.4") as mysql:
        yield mysql

@pytest.fixture(scope="session")
def mysql_db(mysql_container):
    import mysql.connector
    conn = mysql.connector.connect(
        host=mysql_container.get_container_host_ip(),
        port=int(mysql_container.get_exposed_port(3306)),
        user=mysql_container.username,
        password=mysql_container.password,
        database=mysql_container.dbname,
    )
    yield conn
    conn.close()

@pytest.fixture
def select_json(mysql_db):
    """Evaluate a JSON SQL expression; returns ``(JSON_TYPE, JSON text)``."""

    def _select(expr: str, path: str = "$") -> tuple[str, str]:
        cur = mysql_db.cursor()
        try:
            cur.execute(
                f"SELECT JSON_TYPE(JSON_EXTRACT({expr}, '{path}')), "
                f"CAST(JSON_EXTRACT({expr}, '{path}') AS CHAR)"
            )
            json_type, text = cur.fetchone()
        finally:
            cur.close()
        return json_type, text

    return _select
