"""Tests for the concrete console commands."""

from unittest.mock import MagicMock

import pytest

from floodlight_console.backend import StaticDeviceInventory, SwitchClient
from floodlight_console.commands import CommandRegistry, NotFound, build_registry, resolve
from floodlight_console.commands.handlers import (
    ExitCommand,
    HelpCommand,
    ShowCommand,
    ShowHostCommand,
    ShowSwitchCommand,
)
from floodlight_console.commands.handlers import host as host_module
from floodlight_console.commands.handlers import switch as switch_module
from floodlight_console.exceptions import BackendError, SessionExit
from floodlight_console.models import AttachmentPoint, DeviceModel, SwitchModel


def data_rows(table):
    """Table lines holding cells, header excluded."""
    return [line for line in table.splitlines() if line.startswith("| ")][1:]


@pytest.fixture
def switches(sample_switch_json):
    return [SwitchModel.model_validate(s) for s in sample_switch_json]


@pytest.fixture
def devices(sample_device_json):
    return [DeviceModel.from_rest(d) for d in sample_device_json]


@pytest.fixture
def switch_client(switches):
    client = MagicMock(spec=SwitchClient)
    client.list_switches.return_value = switches
    return client


class TestShowSwitch:
    def test_all_switches(self, switch_client):
        table = ShowSwitchCommand(switch_client).execute(None, "")
        for column in switch_module.HEADER:
            assert column in table
        rows = data_rows(table)
        assert len(rows) == 2
        assert "00:00:00:00:00:00:00:01" in rows[0]
        assert "10.0.0.11" in rows[0]
        assert "51234" in rows[0]
        assert "2013-09-24 05:20:00 UTC" in rows[0]

    @pytest.mark.parametrize("arguments", ["all", "ALL", "  "])
    def test_all_keyword(self, switch_client, arguments):
        table = ShowSwitchCommand(switch_client).execute(None, arguments)
        assert len(data_rows(table)) == 2

    def test_filter_by_dpid(self, switch_client):
        table = ShowSwitchCommand(switch_client).execute(None, "00:00:00:00:00:00:00:02")
        rows = data_rows(table)
        assert len(rows) == 1
        assert "00:00:00:00:00:00:00:02" in rows[0]

    def test_filter_is_case_insensitive(self, switch_client):
        switch_client.list_switches.return_value = [
            SwitchModel(
                dpid="00:00:00:00:00:00:00:AB",
                connectedSince=0,
                inetAddress="/10.0.0.9:6633",
            )
        ]
        table = ShowSwitchCommand(switch_client).execute(None, "00:00:00:00:00:00:00:ab")
        assert len(data_rows(table)) == 1

    def test_unknown_dpid_gives_header_only(self, switch_client):
        table = ShowSwitchCommand(switch_client).execute(None, "00:00:00:00:00:00:00:99")
        assert "Switch DPID" in table
        assert data_rows(table) == []

    def test_backend_failure_is_one_error_line(self, switch_client):
        switch_client.list_switches.side_effect = BackendError(
            "Malformed JSON from /wm/core/controller/switches/json", "<html>oops</html>"
        )
        output = ShowSwitchCommand(switch_client).execute(None, "")
        assert output.startswith("Error: Malformed JSON")
        assert "<html>oops</html>" in output
        assert "\n" not in output

    def test_switch_row(self, switches):
        row = switch_module.switch_row(switches[1])
        assert len(row) == len(switch_module.HEADER)
        assert row[0] == "00:00:00:00:00:00:00:02"
        assert row[5:7] == ["10.0.0.12", "40001"]


class TestShowHost:
    def test_all_hosts(self, devices):
        table = ShowHostCommand(StaticDeviceInventory(devices)).execute(None, "")
        for column in host_module.HEADER:
            assert column in table
        rows = data_rows(table)
        assert len(rows) == 2
        assert "00:00:00:00:00:0a" in rows[0]
        assert "10.0.0.1" in rows[0]
        assert "unknown" in rows[0]
        assert "00:00:00:00:00:00:00:01/1" in rows[0]

    def test_empty_inventory_gives_header_only(self):
        table = ShowHostCommand(StaticDeviceInventory()).execute(None, "")
        assert "MAC Address" in table
        assert "Last Seen" in table
        assert data_rows(table) == []

    def test_device_without_ipv4(self, devices):
        row = host_module.device_row(devices[1])
        assert row[0] == "00:00:00:00:00:0b"
        assert row[1] == "10"
        assert row[3] == ""
        assert row[4] == ""

    def test_many_attachment_points_keep_every_column(self):
        device = DeviceModel(
            mac="00:00:00:00:00:0a",
            vlan=10,
            ipv4=["10.0.0.1"],
            attachment_points=[
                AttachmentPoint(switch_dpid=f"00:00:00:00:00:00:00:0{n}", port=n)
                for n in range(1, 8)
            ],
            last_seen=1380000000000,
        )
        table = ShowHostCommand(StaticDeviceInventory([device])).execute(None, "")
        rows = data_rows(table)
        assert len(rows) == 1
        for cell in host_module.device_row(device):
            assert cell in rows[0]

    def test_untagged_vlan_blank(self, devices):
        assert host_module.device_row(devices[0])[1] == ""

    @pytest.mark.parametrize("query", ["00:00:00:00:00:0A", "10.0.0.1"])
    def test_filter_by_mac_or_ip(self, devices, query):
        table = ShowHostCommand(StaticDeviceInventory(devices)).execute(None, query)
        rows = data_rows(table)
        assert len(rows) == 1
        assert "00:00:00:00:00:0a" in rows[0]

    def test_backend_failure(self):
        inventory = MagicMock()
        inventory.get_all_devices.side_effect = BackendError("Cannot reach controller")
        output = ShowHostCommand(inventory).execute(None, "")
        assert output == "Error: Cannot reach controller"

    def test_repeated_runs_identical(self, devices):
        cmd = ShowHostCommand(StaticDeviceInventory(devices))
        assert cmd.execute(None, "") == cmd.execute(None, "")


class TestRootCommands:
    def test_exit_signals_session_end(self):
        with pytest.raises(SessionExit):
            ExitCommand().execute(None, "")

    def test_quit_alias(self):
        assert ExitCommand("quit").name == "quit"

    def test_help_lists_every_command(self, switch_client):
        registry = build_registry(switch_client, StaticDeviceInventory())
        output = registry.get(("help",)).execute(None, "")
        lines = output.splitlines()
        assert lines[0] == "Available commands:"
        assert len(lines) == 1 + len(registry)
        assert any(line.strip().startswith("show switch [SWITCH]") for line in lines)
        assert any(line.strip().startswith("show host [MAC|IP]") for line in lines)

    def test_help_rejects_arguments(self):
        output = HelpCommand(CommandRegistry()).execute(None, "please")
        assert output == "Error: 'help' takes no arguments"

    def test_show_lists_subcommands(self, switch_client):
        registry = build_registry(switch_client, StaticDeviceInventory())
        output = registry.get(("show",)).execute(None, "")
        assert output.splitlines()[0] == "Usage:"
        assert "show host [MAC|IP]" in output
        assert "show switch [SWITCH]" in output

    def test_show_arguments_rejected_without_subcommands(self):
        registry = CommandRegistry()
        registry.register(ShowCommand(registry))
        result = resolve(registry, "show everything")
        assert result.arguments == "everything"
        output = result.command.execute(None, result.arguments)
        assert output == "Error: 'show' takes no arguments"

    def test_show_arguments_are_unknown_subcommands(self, switch_client):
        registry = build_registry(switch_client, StaticDeviceInventory())
        assert isinstance(resolve(registry, "show everything"), NotFound)

    def test_show_without_subcommands(self):
        registry = CommandRegistry()
        show = ShowCommand(registry)
        registry.register(show)
        assert show.execute(None, "") == "Nothing to show"


class TestDefaultRegistry:
    def test_default_commands(self, switch_client):
        registry = build_registry(switch_client, StaticDeviceInventory())
        names = [c.name for c in registry.commands()]
        assert names == ["exit", "help", "quit", "show", "show host", "show switch"]

    def test_switch_scenario(self, switch_client):
        registry = build_registry(switch_client, StaticDeviceInventory())
        result = resolve(registry, "show swi 00:00:00:00:00:00:00:01")
        output = result.command.execute(None, result.arguments)
        rows = data_rows(output)
        assert len(rows) == 1
        assert "00:00:00:00:00:00:00:01" in rows[0]
