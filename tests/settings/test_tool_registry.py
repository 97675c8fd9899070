"""
Tests for arduinokit.settings.tool_registry module.
"""

import logging
import os

from arduinokit.settings.tool_registry import (
    BuiltinTool,
    ToolProperties,
    ToolRegistryBuilder,
    list_directories,
    parse_builtin_tools,
    tool_key,
)


class TestToolKey:
    def test_unversioned(self):
        assert tool_key("avrdude") == "runtime.tools.avrdude.path"

    def test_versioned(self):
        assert tool_key("avrdude", "6.3") == "runtime.tools.avrdude-6.3.path"


class TestParseBuiltinTools:
    """Tests for the built-in tools manifest parser."""

    def test_records(self):
        tools = parse_builtin_tools(
            "arduino.avrdude=6.0.1-arduino5\narduino.avr-gcc=4.8.1-arduino5\n"
        )
        assert tools == [
            BuiltinTool("arduino", "avrdude", "6.0.1-arduino5"),
            BuiltinTool("arduino", "avr-gcc", "4.8.1-arduino5"),
        ]

    def test_windows_line_endings(self):
        tools = parse_builtin_tools("arduino.avrdude=6.0\r\narduino.arduinoOTA=1.2.1\r\n")
        assert [tool.version for tool in tools] == ["6.0", "1.2.1"]

    def test_whitespace_trimmed(self):
        assert parse_builtin_tools(" arduino . avrdude = 6.0 ") == [
            BuiltinTool("arduino", "avrdude", "6.0")
        ]

    def test_blank_lines_skipped(self):
        assert parse_builtin_tools("\n\narduino.avrdude=6.0\n\n") == [
            BuiltinTool("arduino", "avrdude", "6.0")
        ]

    def test_malformed_lines_skipped_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            tools = parse_builtin_tools(
                "no separators\n" "arduino-avrdude=6.0\n" "arduino.avrdude\n" "avrdude=6.0.1\n"
            )

        assert tools == []
        assert caplog.text.count("Skipping malformed built-in tools record") == 4


class TestToolProperties:
    def test_mapping_interface(self):
        properties = ToolProperties()
        properties.register("avrdude", "6.0", "/tools/avr")

        assert len(properties) == 2
        assert properties["runtime.tools.avrdude.path"] == "/tools/avr"
        assert "runtime.tools.avrdude-6.0.path" in properties
        assert dict(properties) == {
            "runtime.tools.avrdude.path": "/tools/avr",
            "runtime.tools.avrdude-6.0.path": "/tools/avr",
        }

    def test_tool_names_and_versions(self):
        properties = ToolProperties()
        properties.register("avrdude", "6.0", "/a")
        properties.register("avr-gcc", "7.3", "/b")
        properties.register("avrdude", "6.3", "/c")

        assert properties.tool_names() == ["avrdude", "avr-gcc"]
        assert properties.versions("avrdude") == ["6.0", "6.3"]
        assert properties.versions("bossac") == []

    def test_tool_path(self):
        properties = ToolProperties()
        properties.register("avrdude", "6.0", "/a")

        assert properties.tool_path("avrdude") == "/a"
        assert properties.tool_path("avrdude", "6.0") == "/a"
        assert properties.tool_path("avrdude", "9.9") is None


class TestListDirectories:
    def test_sorted_directories_only(self, tmp_path):
        (tmp_path / "b").mkdir()
        (tmp_path / "a").mkdir()
        (tmp_path / "file.txt").write_text("")

        assert list_directories(str(tmp_path)) == ["a", "b"]

    def test_missing_directory(self, tmp_path):
        assert list_directories(str(tmp_path / "missing")) is None


class TestToolRegistryBuilder:
    """Tests for scanning built-in and installed tools."""

    def test_builtin_tools_registered(self, linux_install):
        hardware = str(linux_install / "hardware")
        builtin_dir = os.path.join(hardware, "tools", "avr")

        properties = ToolRegistryBuilder(hardware, None).scan()

        assert properties.tool_path("avrdude") == builtin_dir
        assert properties.tool_path("avrdude", "6.0") == builtin_dir
        assert properties.tool_path("avr-gcc", "4.9.2-atmel3.5.4-arduino2") == builtin_dir
        assert properties.tool_path("arduinoOTA") == builtin_dir

    def test_installed_tools_override_current_pointer(self, linux_install, package_dir):
        hardware = str(linux_install / "hardware")
        builtin_dir = os.path.join(hardware, "tools", "avr")
        installed = str(package_dir / "packages" / "arduino" / "tools" / "avrdude" / "6.3.0-arduino17")

        properties = ToolRegistryBuilder(hardware, str(package_dir)).scan()

        assert properties["runtime.tools.avrdude.path"] == installed
        assert properties["runtime.tools.avrdude-6.0.path"] == builtin_dir
        assert properties["runtime.tools.avrdude-6.3.0-arduino17.path"] == installed

    def test_package_without_tools_does_not_abort_scan(self, package_dir):
        properties = ToolRegistryBuilder(None, str(package_dir)).scan()

        assert properties.tool_names() == ["avr-gcc", "avrdude", "xtensa-esp32-elf-gcc"]
        assert properties.tool_path("xtensa-esp32-elf-gcc") == str(
            package_dir
            / "packages"
            / "esp32"
            / "tools"
            / "xtensa-esp32-elf-gcc"
            / "1.22.0-97-gc752ad5-5.2.0"
        )

    def test_last_package_wins(self, tmp_path):
        packages = tmp_path / "packages"
        (packages / "arduino" / "tools" / "bossac" / "1.7.0").mkdir(parents=True)
        (packages / "zzz" / "tools" / "bossac" / "1.9.1").mkdir(parents=True)

        properties = ToolRegistryBuilder(None, str(tmp_path)).scan()

        assert properties.tool_path("bossac") == str(packages / "zzz" / "tools" / "bossac" / "1.9.1")
        assert properties.tool_path("bossac", "1.7.0") == str(
            packages / "arduino" / "tools" / "bossac" / "1.7.0"
        )

    def test_last_version_wins_within_tool(self, tmp_path):
        tool_dir = tmp_path / "packages" / "arduino" / "tools" / "avrdude"
        (tool_dir / "6.3.0").mkdir(parents=True)
        (tool_dir / "6.0.1").mkdir()

        properties = ToolRegistryBuilder(None, str(tmp_path)).scan()

        assert properties.tool_path("avrdude") == str(tool_dir / "6.3.0")
        assert properties.versions("avrdude") == ["6.0.1", "6.3.0"]

    def test_missing_manifest_and_packages(self, tmp_path):
        properties = ToolRegistryBuilder(str(tmp_path / "hardware"), str(tmp_path / "data")).scan()
        assert len(properties) == 0

    def test_malformed_manifest_lines_skipped(self, tmp_path):
        tools_dir = tmp_path / "hardware" / "tools" / "avr"
        tools_dir.mkdir(parents=True)
        (tools_dir / "builtin_tools_versions.txt").write_text(
            "arduino.avrdude=6.0\ngarbage\n\n"
        )

        properties = ToolRegistryBuilder(str(tmp_path / "hardware"), None).scan()

        assert properties.tool_names() == ["avrdude"]
        assert len(properties) == 2

    def test_undecodable_manifest_does_not_abort_scan(self, tmp_path):
        tools_dir = tmp_path / "hardware" / "tools" / "avr"
        tools_dir.mkdir(parents=True)
        (tools_dir / "builtin_tools_versions.txt").write_bytes(
            b"arduino.avrdude=6.0\xff\narduino.arduinoOTA=1.2.1\n"
        )
        bossac = tmp_path / "data" / "packages" / "arduino" / "tools" / "bossac" / "1.7.0"
        bossac.mkdir(parents=True)

        properties = ToolRegistryBuilder(
            str(tmp_path / "hardware"), str(tmp_path / "data")
        ).scan()

        assert properties.tool_path("bossac") == str(bossac)
        assert properties.tool_path("arduinoOTA", "1.2.1") == str(tools_dir)
        assert properties.tool_path("avrdude") == str(tools_dir)

    def test_runtime_tool_sets_both_keys(self):
        properties = ToolProperties()
        ToolRegistryBuilder(None, None).runtime_tool(properties, "avrdude", "6.0", "/x")

        assert properties["runtime.tools.avrdude.path"] == "/x"
        assert properties["runtime.tools.avrdude-6.0.path"] == "/x"
