"""
Tests for the Flag value object.
"""

import pytest

from communicatord.constants import DEFAULT_PRIORITY
from communicatord.exceptions import InvalidName
from communicatord.flags import Flag, FlagsDirectory, FlagState


class TestFlagConstruction:
    def test_defaults(self):
        flag = Flag("core-plugins", "attachment", "clamav-missing")

        assert flag.get_unit() == "core-plugins"
        assert flag.get_section() == "attachment"
        assert flag.get_name() == "clamav-missing"
        assert flag.get_state() == FlagState.UP
        assert flag.get_priority() == DEFAULT_PRIORITY == 5
        assert flag.get_count() == 0
        assert flag.get_date() is None
        assert flag.get_modified() is None
        assert flag.get_manual_down() is False
        assert flag.get_tags() == frozenset()
        assert flag.get_line() == 0
        assert flag.get_message() == ""
        assert flag.get_hostname() == ""
        assert flag.get_version() == ""

    def test_names_are_lowercased(self):
        flag = Flag("Core-Plugins", "ATTACHMENT", "ClamAV-Missing")

        assert (flag.get_unit(), flag.get_section(), flag.get_name()) == (
            "core-plugins",
            "attachment",
            "clamav-missing",
        )

    @pytest.mark.parametrize(
        "unit, section, name",
        [
            ("", "section", "name"),
            ("unit", "-abc", "name"),
            ("unit", "section", "abc-"),
            ("ab--c", "section", "name"),
            ("unit", "1abc", "name"),
            ("unit", "section", "ab_c"),
        ],
    )
    def test_invalid_names_raise(self, unit, section, name):
        with pytest.raises(InvalidName):
            Flag(unit, section, name)


class TestFlagSetters:
    def setup_method(self):
        self.flag = Flag("core-plugins", "sendmail", "postfix-missing")

    def test_setters_chain(self):
        result = (
            self.flag.set_state(FlagState.DOWN)
            .set_source_file("sendmail.py")
            .set_function("check_postfix")
            .set_line(42)
            .set_message("postfix is not installed")
            .set_priority(60)
            .set_manual_down(True)
            .add_tag("mail")
        )

        assert result is self.flag
        assert self.flag.get_state() == FlagState.DOWN
        assert self.flag.get_source_file() == "sendmail.py"
        assert self.flag.get_function() == "check_postfix"
        assert self.flag.get_line() == 42
        assert self.flag.get_message() == "postfix is not installed"
        assert self.flag.get_priority() == 60
        assert self.flag.get_manual_down() is True
        assert self.flag.get_tags() == {"mail"}

    @pytest.mark.parametrize("priority, expected", [(-5, 0), (250, 100), (42, 42), (0, 0), (100, 100)])
    def test_priority_is_clamped(self, priority, expected):
        assert self.flag.set_priority(priority).get_priority() == expected

    def test_tags_are_a_set(self):
        self.flag.add_tag("mail").add_tag("MAIL").add_tag("postfix")

        assert self.flag.get_tags() == {"mail", "postfix"}

    def test_invalid_tag_raises_and_is_not_added(self):
        with pytest.raises(InvalidName):
            self.flag.add_tag("bad_tag")

        assert self.flag.get_tags() == frozenset()

    def test_get_tags_is_a_copy(self):
        self.flag.add_tag("mail")
        tags = self.flag.get_tags()
        self.flag.add_tag("other")

        assert tags == {"mail"}

    def test_set_state_accepts_enum_value(self):
        assert self.flag.set_state("down").get_state() == FlagState.DOWN


class TestFlagFilename:
    def test_filename_is_built_from_names(self, flags_dir):
        flag = Flag("core-plugins", "attachment", "clamav-missing")

        filename = flag.get_filename(FlagsDirectory.at(str(flags_dir)))

        assert filename == f"{flags_dir}/core-plugins_attachment_clamav-missing.flag"

    def test_filename_is_cached(self, flags_dir, tmp_path):
        other_dir = tmp_path / "other"
        other_dir.mkdir()
        flag = Flag("unit", "section", "name")

        first = flag.get_filename(FlagsDirectory.at(str(flags_dir)))
        second = flag.get_filename(FlagsDirectory.at(str(other_dir)))

        assert first == second

    def test_filename_uses_process_wide_directory(self, flag_store, flags_dir):
        flag = Flag("unit", "section", "name")

        assert flag.get_filename() == f"{flags_dir}/unit_section_name.flag"

    def test_missing_directory_gives_no_filename(self, tmp_path):
        flag = Flag("unit", "section", "name")

        assert flag.get_filename(FlagsDirectory.at(str(tmp_path / "missing"))) is None

    def test_missing_directory_is_not_cached_on_the_flag(self, tmp_path, flags_dir):
        flag = Flag("unit", "section", "name")
        flag.get_filename(FlagsDirectory.at(str(tmp_path / "missing")))

        assert flag.get_filename(FlagsDirectory.at(str(flags_dir))) is not None
