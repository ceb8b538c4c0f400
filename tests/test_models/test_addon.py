"""Tests for addon tree models."""

from addondeploy.models.addon import AddonConfig, InstallKind


class TestAddonConfig:
    """Test AddonConfig model."""

    def test_default_values(self):
        """Test a bare addon leaves every decision unset."""
        addon = AddonConfig()

        assert addon.enabled is None
        assert addon.on_by_default is None
        assert addon.is_required is None
        assert addon.dependencies == []
        assert addon.required_by == []
        assert addon.inputs == {}
        assert addon.install_kind == InstallKind.TERRAFORM
        assert addon.is_enabled() is False

    def test_terraform_root(self):
        """Test terraform root constructor."""
        addon = AddonConfig.terraform("test", "deploy-arch-ibm-event-notifications", "fully-configurable", {"region": "us-south"})

        assert addon.prefix == "test"
        assert addon.offering_name == "deploy-arch-ibm-event-notifications"
        assert addon.offering_flavor == "fully-configurable"
        assert addon.install_kind == InstallKind.TERRAFORM
        assert addon.inputs == {"region": "us-south"}
        assert addon.enabled is True
        assert addon.on_by_default is True

    def test_stack_root(self):
        """Test stack root constructor."""
        addon = AddonConfig.stack("test", "stack-offering", "standard")

        assert addon.install_kind == InstallKind.STACK
        assert addon.inputs == {}
        assert addon.is_enabled()

    def test_default_config_name(self):
        """Test root config naming."""
        addon = AddonConfig.terraform("abc", "kms", "standard")

        assert addon.default_config_name() == "abc-kms"

    def test_nested_dependencies_from_dict(self):
        """Test loading caller overrides from plain data."""
        addon = AddonConfig(
            **{
                "offering_name": "root",
                "dependencies": [
                    {"offering_name": "kms", "enabled": False},
                    {"offering_name": "cos", "inputs": {"plan": "lite"}},
                ],
                "unknown_field": "ignored",
            }
        )

        assert len(addon.dependencies) == 2
        assert addon.dependencies[0].enabled is False
        assert addon.dependencies[1].inputs == {"plan": "lite"}

    def test_find_dependency(self):
        """Test direct dependency lookup by offering name."""
        kms = AddonConfig(offering_name="kms")
        addon = AddonConfig(offering_name="root", dependencies=[kms])

        assert addon.find_dependency("kms") is kms
        assert addon.find_dependency("cos") is None

    def test_walk_is_pre_order(self):
        """Test walk visits parents before children, in declaration order."""
        leaf = AddonConfig(offering_name="leaf")
        a = AddonConfig(offering_name="a", dependencies=[leaf])
        b = AddonConfig(offering_name="b")
        root = AddonConfig(offering_name="root", dependencies=[a, b])

        assert [n.offering_name for n in root.walk()] == ["root", "a", "leaf", "b"]
