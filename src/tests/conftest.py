"""Pytest configuration and shared fixtures."""

import shutil
import tempfile
from pathlib import Path

import pytest

from symbol_index.config.settings import IndexConfig
from symbol_index.models import (
    ClassSymbolInfo,
    FieldSymbolInfo,
    FileCheck,
    MethodSymbolInfo,
)
from symbol_index.search.index_service import IndexService


@pytest.fixture
def temp_index_dir():
    """Create a temporary directory for index testing."""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def index_config():
    """Index configuration with a single worker thread."""
    return IndexConfig(worker_threads=1, default_max_results=20)


@pytest.fixture
def index_service(temp_index_dir, index_config):
    """IndexService over a fresh on-disk Whoosh index."""
    service = IndexService.open(temp_index_dir, index_config)
    yield service
    service.engine.close()


@pytest.fixture
def source_file(tmp_path) -> FileCheck:
    """A file reference for symbols extracted from one compilation unit."""
    path = tmp_path / "src" / "Foo.scala"
    return FileCheck(str(path), timestamp=1700000000.0)


@pytest.fixture
def other_file(tmp_path) -> FileCheck:
    path = tmp_path / "src" / "Other.scala"
    return FileCheck(str(path), timestamp=1700000000.0)


@pytest.fixture
def sample_symbols(source_file):
    """A class, one of its methods and one of its fields."""
    return [
        ClassSymbolInfo(source_file, "com.example.Foo"),
        MethodSymbolInfo(source_file, "com.example.Foo.fooBar"),
        FieldSymbolInfo(source_file, "com.example.Foo.fooField"),
    ]
