"""Unit tests for cfgtree.formats.toml_format module."""

from pathlib import Path

import pytest

from cfgtree.config.configuration import Configuration
from cfgtree.config.errors import ConfigParseError, ConfigValueError
from cfgtree.config.node import ConfigType
from cfgtree.config.temporal import Date, DateTime, Time, TimeOffset
from cfgtree.formats.toml_format import dump_toml_string, load_toml_file, load_toml_string

SAMPLE_TOML = """\
title = "TOML Example"
enabled = true
ports = [8000, 8001]
flags = [true, false]
mixed = [1, "x", 2.5]
matrix = [[1, 2], [3]]
point = { x = 1.0, y = 2.0 }

[owner]
dob = 1979-05-27T07:32:00-08:00
day = 1979-05-27
clock = 07:32:00.999999999
local = 1979-05-27 07:32:00

[servers.alpha]
ip = "10.0.0.1"

[[products]]
name = "Hammer"

[[products]]
name = "Nail"
sku = 284758393
"""


class TestLoadTomlString:
    """Tests for load_toml_string function."""

    def test_scalars_arrays_and_tables(self) -> None:
        """Test loading every TOML value type."""
        config = load_toml_string(SAMPLE_TOML)

        assert config.get_string("title") == "TOML Example"
        assert config.get_boolean("enabled") is True
        assert config.get_integer32_list("ports") == [8000, 8001]
        assert config.get_boolean_list("flags") == [True, False]
        assert config.size("mixed") == 3
        assert config.get_integer64_list("matrix[0]") == [1, 2]
        assert config.get_double_point2d("point") == (1.0, 2.0)
        assert config.get_string("servers.alpha.ip") == "10.0.0.1"
        assert config.type("products") is ConfigType.LIST
        assert config.get_integer64("products[1].sku") == 284758393

    def test_temporal_values_keep_full_precision(self) -> None:
        """Test that dates and times are parsed from their source text."""
        config = load_toml_string(SAMPLE_TOML)

        dob = config.get_date_time("owner.dob")
        assert dob.offset == TimeOffset(-480)
        assert dob.time == Time(7, 32)
        assert config.get_date("owner.day") == Date(1979, 5, 27)
        assert config.get_time("owner.clock") == Time(7, 32, 0, 999_999_999)
        assert config.get_date_time("owner.local").is_local()

    def test_member_order_is_kept(self) -> None:
        """Test that parameters keep their document order."""
        config = load_toml_string(SAMPLE_TOML)

        assert config.list_parameter_names(recursive=False) == [
            "title",
            "enabled",
            "ports",
            "flags",
            "mixed",
            "matrix",
            "point",
            "owner",
            "servers",
            "products",
        ]

    @pytest.mark.parametrize(
        "document",
        [
            "a = ",
            "a = 1\na = 2",
            "[a\nb = 1",
            "a = 9223372036854775808",
            '"a b" = 1',
        ],
    )
    def test_invalid_documents_raise_parse_error(self, document: str) -> None:
        """Test syntax errors, duplicates, overflows and invalid names."""
        with pytest.raises(ConfigParseError):
            load_toml_string(document)

    def test_empty_document(self) -> None:
        """Test that an empty document yields an empty configuration."""
        assert load_toml_string("").empty()


class TestTomlFiles:
    """Tests for TOML file loading."""

    def test_load_toml_file(self, tmp_path: Path) -> None:
        """Test loading from disk."""
        path = tmp_path / "config.toml"
        path.write_text(SAMPLE_TOML, encoding="utf-8")

        config = load_toml_file(str(path))

        assert config.size("products") == 2
        assert config.get_date("owner.day") == Date(1979, 5, 27)

    def test_missing_file_raises_parse_error(self, tmp_path: Path) -> None:
        """Test that unreadable files are reported as parse errors."""
        with pytest.raises(ConfigParseError):
            load_toml_file(str(tmp_path / "missing.toml"))


class TestDumpTomlString:
    """Tests for dump_toml_string function."""

    def test_empty_configuration(self) -> None:
        """Test that nothing is written for an empty configuration."""
        assert dump_toml_string(Configuration()) == ""

    def test_scalars_are_written_before_tables(self) -> None:
        """Test that values of a table precede its sub-tables."""
        config = Configuration()
        config.set_integer64("camera.fps", 30)
        config.set_string("name", "demo")
        config.set_integer64_list("camera.resolution", [640, 480])
        config.create_list("cameras")
        group = Configuration()
        group.set_string("name", "left")
        config.append("cameras", group)

        lines = dump_toml_string(config).splitlines()

        assert lines.index('name = "demo"') < lines.index("[camera]")
        assert lines.index('cameras = [{name = "left"}]') < lines.index("[camera]")
        assert lines.index("[camera]") < lines.index("fps = 30")
        assert "resolution = [640, 480]" in lines

    def test_tables_holding_only_tables_have_no_header(self) -> None:
        """Test that intermediate tables are defined implicitly."""
        config = Configuration()
        config.set_integer64("a.b.c", 1)

        assert dump_toml_string(config).split() == ["[a.b]", "c", "=", "1"]

    def test_special_values(self) -> None:
        """Test escaping of strings, non-finite floats and date-times."""
        config = Configuration()
        config.set_string("text", 'say "hi"\n\x01')
        config.set_double("nan", float("nan"))
        config.set_double("inf", float("-inf"))
        config.set_date_time("stamp", DateTime.from_string("2023-05-17T08:30:00Z"))

        text = dump_toml_string(config)
        lines = text.splitlines()

        assert "nan = nan" in lines
        assert "inf = -inf" in lines
        assert "stamp = 2023-05-17T08:30:00Z" in lines
        assert load_toml_string(text).get_string("text") == 'say "hi"\n\x01'

    def test_temporal_values_keep_nanoseconds(self) -> None:
        """Test that sub-microsecond digits and offsets are written unchanged."""
        config = Configuration()
        config.set_time("clock", Time(7, 32, 0, 999_999_999))
        config.set_date_time(
            "stamp", DateTime.from_string("1979-05-27T00:32:00.000000001-00:30")
        )
        config.set_date_time("local", DateTime.from_string("1979-05-27T07:32:00"))
        config.set_date("day", Date(1, 1, 1))

        lines = dump_toml_string(config).splitlines()

        assert lines == [
            "clock = 07:32:00.999999999",
            "stamp = 1979-05-27T00:32:00.000000001-00:30",
            "local = 1979-05-27T07:32:00",
            "day = 0001-01-01",
        ]

    @pytest.mark.parametrize(
        "value",
        [
            Date(0, 1, 1),
            DateTime(Date(0, 12, 31), Time(23, 59)),
            DateTime(Date(10000, 1, 1), Time(0, 0), TimeOffset(0)),
            Time(23, 59, 60),
        ],
    )
    def test_values_outside_toml_range_raise_value_error(
        self, value: Date | Time | DateTime
    ) -> None:
        """Test that values tomlkit cannot represent are rejected with the key."""
        config = Configuration()
        if isinstance(value, Date):
            config.set_date("group.when", value)
        elif isinstance(value, Time):
            config.set_time("group.when", value)
        else:
            config.set_date_time("group.when", value)

        with pytest.raises(ConfigValueError) as exc_info:
            dump_toml_string(config)

        assert "group.when" in str(exc_info.value)
        assert "as TOML" in str(exc_info.value)

    def test_year_zero_cannot_be_loaded(self) -> None:
        """Test that TOML documents with year 0 are reported as parse errors."""
        with pytest.raises(ConfigParseError):
            load_toml_string("day = 0000-03-01")

    def test_round_trip(self) -> None:
        """Test that loading a dump restores the configuration."""
        config = load_toml_string(SAMPLE_TOML)
        config.create_list("empty")
        config.set_group("nothing", Configuration())
        config.set_string("servers.alpha.note", "tab\there")
        config.set_time("owner.nano", Time(0, 0, 0, 1))

        assert load_toml_string(dump_toml_string(config)) == config
