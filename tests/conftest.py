# Path: tests/conftest.py
"""
Pytest Configuration and Shared Fixtures for ixbrl_instance

Provides common test fixtures used across all test modules.
"""

import os
import sys
import tempfile
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

# Add project root and tests directory to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
TESTS_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))
sys.path.insert(0, str(TESTS_ROOT))

from fixtures.sample_documents import FIXED_TIMESTAMP


# ==============================================================================
# ENVIRONMENT FIXTURES
# ==============================================================================

@pytest.fixture
def mock_env_vars(temp_dir):
    """Provide mock environment variables for testing."""
    env_vars = {
        'IXBRL_INSTANCE_ENVIRONMENT': 'test',
        'IXBRL_INSTANCE_OUTPUT_DIR': str(temp_dir / 'output'),
        'IXBRL_INSTANCE_LOG_LEVEL': 'DEBUG',
        'IXBRL_INSTANCE_LOG_CONSOLE': 'false',
        'IXBRL_INSTANCE_PRETTY_PRINT': 'true',
        'IXBRL_INSTANCE_DESCRIPTION': 'Test instance',
        'IXBRL_INSTANCE_ENABLE_PARALLEL': 'false',
        'IXBRL_INSTANCE_MAX_WORKERS': '2',
    }

    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ==============================================================================
# MOCK FIXTURES
# ==============================================================================

def _mock_config(values: dict) -> MagicMock:
    config = MagicMock()
    config.get.side_effect = lambda key, default=None: values.get(key, default)
    return config


@pytest.fixture
def mock_config():
    """Create a mock ConfigLoader for testing."""
    return _mock_config({
        'environment': 'test',
        'description': 'Test instance',
        'phase_label': 'instance generation',
        'output_extension': '.xbrl',
        'pretty_print': True,
        'enable_parallel': False,
        'max_workers': 4,
    })


@pytest.fixture
def parallel_config():
    """Mock ConfigLoader with parallel generation enabled."""
    return _mock_config({
        'environment': 'test',
        'description': 'Test instance',
        'phase_label': 'instance generation',
        'output_extension': '.xbrl',
        'pretty_print': True,
        'enable_parallel': True,
        'max_workers': 4,
    })


# ==============================================================================
# GENERATION FIXTURES
# ==============================================================================

@pytest.fixture
def load_indices(mock_config):
    """Factory: parse XHTML strings into FactIndices."""
    from ixbrl_instance.ixbrl.document_set import IXBRLDocumentSet

    def _load(*documents, base_urls=None):
        document_set = IXBRLDocumentSet.from_strings(
            list(documents), base_urls, config=mock_config
        )
        return document_set.build_indices()

    return _load


@pytest.fixture
def make_run(mock_config):
    """Factory: TargetRun over indices with a fresh xbrli:xbrl root."""
    from ixbrl_instance.ixbrl.transforms import ValueFormatter
    from ixbrl_instance.instance.namespace_curator import NamespaceCurator
    from ixbrl_instance.instance.tree_builder import InstanceTreeBuilder
    from ixbrl_instance.instance.target_run import TargetRun
    from ixbrl_instance.constants import XBRL_ROOT, XBRLI_NS

    def _make_run(indices, target=''):
        builder = InstanceTreeBuilder(NamespaceCurator().curate(indices.documents))
        builder.create_root(XBRL_ROOT, XBRLI_NS)
        return TargetRun(
            target=target,
            indices=indices,
            builder=builder,
            formatter=ValueFormatter(mock_config),
            phase_label='instance generation',
        )

    return _make_run


@pytest.fixture
def generate(load_indices, mock_config):
    """Factory: generate one target's InstanceDocument from XHTML strings."""
    from ixbrl_instance.instance.generator import InstanceGenerator

    def _generate(*documents, target='', name='report', base_urls=None):
        indices = load_indices(*documents, base_urls=base_urls)
        generator = InstanceGenerator(indices, config=mock_config, clock=lambda: FIXED_TIMESTAMP)
        return generator.generate(target, name)

    return _generate


# ==============================================================================
# UTILITY FIXTURES
# ==============================================================================

@pytest.fixture
def reset_singletons():
    """Reset any singleton instances between tests."""
    from ixbrl_instance.core.config_loader import ConfigLoader
    ConfigLoader._instance = None
    ConfigLoader._initialized = False

    yield

    ConfigLoader._instance = None
    ConfigLoader._initialized = False
