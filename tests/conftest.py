"""Pytest configuration for tracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Geometry is double precision, so the default float type is f64. Using
    session scope prevents multiple ti.init() calls.
    """
    ti.init(arch=ti.cpu, default_fp=ti.f64, random_seed=42)
    yield


@pytest.fixture(autouse=True)
def clear_scene_data():
    """Clear scene data before and after each test."""
    # Import here so Taichi is initialized first
    from src.tracer.scene.intersection import clear_scene

    clear_scene()
    yield
    clear_scene()
