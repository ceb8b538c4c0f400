"""Tests for config naming helpers."""

from addondeploy.utils.naming import dependency_config_name, random_suffix


def test_random_suffix():
    """Test suffix length and alphabet."""
    suffix = random_suffix()

    assert len(suffix) == 6
    assert suffix == suffix.lower()
    assert suffix.isalnum()
    assert len(random_suffix(10)) == 10


def test_dependency_config_name():
    """Test dependency config names."""
    assert dependency_config_name("deploy-arch-ibm-kms", "x1y2z3") == "deploy-arch-ibm-kms-x1y2z3"
