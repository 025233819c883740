"""
Pytest configuration and shared fixtures for scadmath tests.
"""

import pytest

from scadmath.config import BuildVersion, Feature, RuntimeConfig
from scadmath.runtime import CallResult, ListModuleStack, Runtime


@pytest.fixture
def runtime_factory():
    """Factory fixture for creating runtimes with custom configuration."""

    def _create_runtime(
        features=(Feature.EXPERIMENTAL_CONCAT,),
        version: BuildVersion = BuildVersion(2014, 3),
        frames=(),
        entropy_seed: int = 1234,
        **overrides,
    ) -> Runtime:
        config = RuntimeConfig(
            version=version,
            features=frozenset(features),
            entropy_seed=entropy_seed,
            **overrides,
        )
        return Runtime(config, module_stack=ListModuleStack(frames))

    return _create_runtime


@pytest.fixture
def runtime(runtime_factory) -> Runtime:
    """A runtime with every experimental feature enabled."""
    return runtime_factory()


@pytest.fixture
def call(runtime):
    """Fixture to call a builtin and get the full CallResult."""

    def _call(name: str, *args) -> CallResult:
        return runtime.call(name, *args)

    return _call


@pytest.fixture
def evaluate(call):
    """Fixture to call a builtin and get its result as plain Python data."""

    def _evaluate(name: str, *args):
        return call(name, *args).unwrap()

    return _evaluate
