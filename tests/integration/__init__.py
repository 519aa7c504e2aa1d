"""
Integration tests for docstore.

These tests verify that all components work together correctly,
including collections over real files and databases built from config.
"""

import pytest


# Integration test markers
integration = pytest.mark.integration
slow = pytest.mark.slow
