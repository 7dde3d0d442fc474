"""Tests for vlanprov/dhcp"""

from unittest.mock import patch

import pytest

from vlanprov.dhcp import (
    DEFAULT_PRIORITY,
    DhcpAddressAcquirer,
    Found,
    NotFound,
    get_client,
    list_clients,
    probe_client,
    register_client,
)
from vlanprov.dhcp.base import BaseDhcpClient
from vlanprov.dhcp.clients import Dhclient, Dhcpcd, Udhcpc
from vlanprov.exceptions import (
    ExternalOperationError,
    UnavailableCapabilityError,
    UnsupportedCombinationError,
    UsageError,
)
from vlanprov.models import AddressFamily


def _installed(*binaries):
    return lambda binary: f"/usr/sbin/{binary}" if binary in binaries else None


class TestRegistry:
    """Client registration and lookup."""

    def test_builtin_clients_registered(self):
        assert {"dhclient", "dhcpcd", "udhcpc"} <= set(list_clients())
        assert list_clients() == sorted(list_clients())

    def test_default_priority(self):
        assert DEFAULT_PRIORITY == ("dhclient", "dhcpcd", "udhcpc")

    def test_get_client_case_insensitive(self):
        assert isinstance(get_client("DHCLIENT"), Dhclient)

    def test_get_client_unknown(self):
        with pytest.raises(ValueError) as exc_info:
            get_client("pump")
        assert "Unknown DHCP client 'pump'" in str(exc_info.value)
        assert "Available:" in str(exc_info.value)

    def test_register_client_sets_name(self):
        @register_client("Test-Client")
        class TestClient(BaseDhcpClient):
            binary = "test-client"

            def command(self, device, family):
                return [self.binary, device]

        assert TestClient.name == "test-client"
        assert isinstance(get_client("test-client"), TestClient)


class TestCommands:
    """Per-client lease command lines."""

    def test_dhclient(self):
        assert Dhclient().command("eth0.200", AddressFamily.V4) == ["dhclient", "-1", "-v", "eth0.200"]
        assert Dhclient().command("eth0.201", AddressFamily.V6) == ["dhclient", "-6", "-1", "-v", "eth0.201"]

    def test_dhcpcd(self):
        assert Dhcpcd().command("eth0.200", AddressFamily.V4) == ["dhcpcd", "-4", "-w", "eth0.200"]
        assert Dhcpcd().command("eth0.201", AddressFamily.V6) == ["dhcpcd", "-6", "-w", "eth0.201"]

    def test_udhcpc(self):
        assert Udhcpc().command("eth0.200", AddressFamily.V4) == ["udhcpc", "-q", "-i", "eth0.200"]
        assert not Udhcpc().supports(AddressFamily.V6)
        with pytest.raises(UnsupportedCombinationError):
            Udhcpc().command("eth0.201", AddressFamily.V6)


class TestProbeClient:
    """Ranked discovery."""

    @patch("vlanprov.dhcp.base.shutil.which")
    def test_auto_picks_first_in_priority(self, mock_which):
        mock_which.side_effect = _installed("dhcpcd", "udhcpc")
        result = probe_client()
        assert isinstance(result, Found)
        assert result.client.name == "dhcpcd"

    @patch("vlanprov.dhcp.base.shutil.which")
    def test_auto_respects_custom_priority(self, mock_which):
        mock_which.side_effect = _installed("dhclient", "udhcpc")
        result = probe_client("auto", ("udhcpc", "dhclient"))
        assert result.client.name == "udhcpc"

    @patch("vlanprov.dhcp.base.shutil.which")
    def test_auto_none_installed(self, mock_which):
        mock_which.return_value = None
        assert probe_client() == NotFound(probed=DEFAULT_PRIORITY)

    @patch("vlanprov.dhcp.base.shutil.which")
    def test_named_client_not_substituted(self, mock_which):
        mock_which.side_effect = _installed("dhclient")
        result = probe_client("udhcpc")
        assert result == NotFound(probed=("udhcpc",))
        mock_which.assert_called_once_with("udhcpc")


class TestDhcpAddressAcquirer:
    """Selection errors and acquisition."""

    @patch("vlanprov.dhcp.base.shutil.which", return_value=None)
    def test_no_client_auto(self, _):
        with pytest.raises(UnavailableCapabilityError, match="No DHCP client found"):
            DhcpAddressAcquirer().select_client(AddressFamily.V4)

    @patch("vlanprov.dhcp.base.shutil.which")
    def test_requested_client_missing(self, mock_which):
        mock_which.side_effect = _installed("dhclient")
        with pytest.raises(UnavailableCapabilityError, match="dhcpcd"):
            DhcpAddressAcquirer(preferred="dhcpcd").select_client(AddressFamily.V4)

    @patch("vlanprov.dhcp.base.shutil.which")
    def test_unsupported_family_names_alternatives(self, mock_which):
        mock_which.side_effect = _installed("udhcpc")
        with pytest.raises(UnsupportedCombinationError) as exc_info:
            DhcpAddressAcquirer(preferred="udhcpc").select_client(AddressFamily.V6)
        assert str(exc_info.value) == "udhcpc does not support DHCPv6; use dhclient or dhcpcd"

    @patch("vlanprov.dhcp.acquirer._run_checked")
    @patch("vlanprov.dhcp.base.shutil.which")
    def test_acquire_runs_client(self, mock_which, mock_run):
        mock_which.side_effect = _installed("dhclient")
        client = DhcpAddressAcquirer().acquire("eth0.201", AddressFamily.V6)
        assert client == "dhclient"
        mock_run.assert_called_once_with(["dhclient", "-6", "-1", "-v", "eth0.201"])

    @patch("vlanprov.dhcp.acquirer._run_checked")
    @patch("vlanprov.dhcp.base.shutil.which")
    def test_select_does_not_run(self, mock_which, mock_run):
        mock_which.side_effect = _installed("dhcpcd")
        assert DhcpAddressAcquirer().select_client(AddressFamily.V4) == "dhcpcd"
        mock_run.assert_not_called()

    @patch("vlanprov.dhcp.acquirer._run_checked")
    @patch("vlanprov.dhcp.base.shutil.which")
    def test_client_failure_propagates(self, mock_which, mock_run):
        mock_which.side_effect = _installed("dhclient")
        mock_run.side_effect = ExternalOperationError("dhclient failed", returncode=2)
        with pytest.raises(ExternalOperationError):
            DhcpAddressAcquirer().acquire("eth0.200", AddressFamily.V4)

    def test_unknown_preferred_client_is_usage_error(self):
        with pytest.raises(UsageError, match="Unknown DHCP client: pump"):
            DhcpAddressAcquirer(preferred="pump")

    def test_unknown_priority_entry_is_usage_error(self):
        with pytest.raises(UsageError, match="Unknown DHCP client: pump"):
            DhcpAddressAcquirer(priority=("dhclient", "pump"))

    def test_preferred_client_case_insensitive(self):
        assert DhcpAddressAcquirer(preferred="DHCPCD").preferred == "DHCPCD"
