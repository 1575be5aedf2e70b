import os
import sys
from pathlib import Path
from typing import Any, Callable, Iterator, Optional
import pytest


pytest_plugins = [
    "tests.fixtures.devops_env",
]

# Ensure 'devops_shared' layer is importable at collection time (module import stage)
_repo_root = Path(__file__).resolve().parents[1]
_repo_root_str = str(_repo_root)
if _repo_root_str not in sys.path:
    sys.path.insert(0, _repo_root_str)
_shared_path = _repo_root / "src" / "lambda" / "layers" / "common" / "python"
_shared_str = str(_shared_path)
if _shared_str not in sys.path:
    sys.path.insert(0, _shared_str)

HANDLER_PATH = str(_repo_root / "src" / "lambda" / "functions" / "devops_event_handler" / "handler.py")


@pytest.fixture(autouse=True)
def aws_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Ensure default AWS region is set for moto/boto3 clients and clear cross-test env leaks."""
    monkeypatch.setenv("AWS_REGION", os.environ.get("AWS_REGION", "us-east-1"))
    monkeypatch.setenv("AWS_DEFAULT_REGION", os.environ.get("AWS_DEFAULT_REGION", "us-east-1"))
    # Provide dummy credentials so botocore signing doesn't fail under moto
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", os.environ.get("AWS_ACCESS_KEY_ID", "testing"))
    monkeypatch.setenv(
        "AWS_SECRET_ACCESS_KEY",
        os.environ.get("AWS_SECRET_ACCESS_KEY", "testing"),
    )
    monkeypatch.setenv("AWS_SESSION_TOKEN", os.environ.get("AWS_SESSION_TOKEN", "testing"))

    # Handler configuration must come from each test, not the developer shell
    for name in ("TEMPLATE_ARN_PREFIX", "EMAIL_FROM", "DEBUG", "INFO", "MAX_WORKERS"):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def load_module() -> Callable[[Optional[str]], dict[str, Any]]:
    import runpy

    def _apply(path: Optional[str] = None) -> dict[str, Any]:
        return runpy.run_path(path or HANDLER_PATH)

    return _apply


def pytest_configure(config):
    """Configure pytest with essential markers."""
    config.addinivalue_line("markers", "unit: unit test")
    config.addinivalue_line("markers", "integration: integration test")


def pytest_collection_modifyitems(config, items):
    """Add markers based on test file location."""
    rootdir = Path(config.rootdir)

    for item in items:
        try:
            rel_path = Path(item.fspath).relative_to(rootdir)
        except ValueError:
            continue

        if "unit" in rel_path.parts:
            item.add_marker(pytest.mark.unit)
        if "integration" in rel_path.parts:
            item.add_marker(pytest.mark.integration)
