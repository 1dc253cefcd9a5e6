# tests/engine/test_resolution_context.py
"""Tests for ReaderOptions, NumberFormat and the per-read switch registry."""

import pytest
from pydantic import ValidationError


class TestSwitchRegistry:
    def test_names_get_dollar_prefix(self) -> None:
        from logwright.core.switches import LoggingLevelSwitch
        from logwright.engine.context import ResolutionContext

        context = ResolutionContext()

        assert context.add_level_switch("main", LoggingLevelSwitch()) == "$main"
        assert context.add_level_switch("$other", LoggingLevelSwitch()) == "$other"
        assert set(context.level_switches) == {"$main", "$other"}

    @pytest.mark.parametrize("name", ["1switch", "$", "my-switch", "", "$$x"])
    def test_invalid_names(self, name: str) -> None:
        from logwright.contracts.errors import InvalidSwitchNameError
        from logwright.core.switches import LoggingFilterSwitch, LoggingLevelSwitch
        from logwright.engine.context import ResolutionContext

        context = ResolutionContext()

        with pytest.raises(InvalidSwitchNameError, match="not a valid name for a Level Switch"):
            context.add_level_switch(name, LoggingLevelSwitch())
        with pytest.raises(InvalidSwitchNameError, match="not a valid name for a Filter Switch"):
            context.add_filter_switch(name, LoggingFilterSwitch())

    def test_lookup_accepts_either_spelling(self) -> None:
        from logwright.core.switches import LoggingFilterSwitch
        from logwright.engine.context import ResolutionContext

        context = ResolutionContext()
        switch = LoggingFilterSwitch()
        context.add_filter_switch("$noise", switch)

        assert context.lookup_filter_switch("noise") is switch
        assert context.lookup_filter_switch("$noise") is switch

    def test_undeclared_level_switch_message(self) -> None:
        from logwright.contracts.errors import UndeclaredSwitchError
        from logwright.engine.context import ResolutionContext

        with pytest.raises(UndeclaredSwitchError) as exc_info:
            ResolutionContext().lookup_level_switch("missing")

        assert exc_info.value.switch_name == "$missing"
        assert str(exc_info.value) == (
            'No LoggingLevelSwitch has been declared with name "$missing". '
            'You might be missing a section "LevelSwitches":{"$missing":"InitialLevel"}'
        )

    def test_undeclared_filter_switch_message(self) -> None:
        from logwright.contracts.errors import UndeclaredSwitchError
        from logwright.engine.context import ResolutionContext

        with pytest.raises(UndeclaredSwitchError, match=r'"FilterSwitches":\{"\$missing":"\{FilterExpression\}"\}'):
            ResolutionContext().lookup_filter_switch("$missing")

    def test_switch_maps_are_copies(self) -> None:
        from logwright.core.switches import LoggingLevelSwitch
        from logwright.engine.context import ResolutionContext

        context = ResolutionContext()
        context.level_switches["$x"] = LoggingLevelSwitch()

        assert context.level_switches == {}


class TestApplicationConfiguration:
    def test_available_when_supplied(self) -> None:
        from logwright.engine.context import ResolutionContext
        from tests.conftest import build_root

        root = build_root({})
        context = ResolutionContext(root)

        assert context.has_app_configuration
        assert context.app_configuration is root

    def test_missing(self) -> None:
        from logwright.contracts.errors import ImplicitConfigurationError
        from logwright.engine.context import ResolutionContext

        context = ResolutionContext()

        assert not context.has_app_configuration
        with pytest.raises(ImplicitConfigurationError):
            _ = context.app_configuration


class TestReaderOptions:
    def test_defaults(self) -> None:
        from logwright.engine.context import ReaderOptions

        options = ReaderOptions()

        assert options.section_name == "Logging"
        assert options.format_provider.decimal_separator == "."
        assert not options.allow_internal_types
        assert not options.allow_internal_methods
        assert options.modules == ()

    def test_frozen(self) -> None:
        from logwright.engine.context import ReaderOptions

        options = ReaderOptions()

        with pytest.raises(ValidationError):
            options.section_name = "Other"

    def test_number_format_validation(self) -> None:
        from logwright.engine.context import NumberFormat

        with pytest.raises(ValidationError):
            NumberFormat(decimal_separator="")

    def test_modules_from_list(self) -> None:
        from logwright.engine.context import ReaderOptions

        assert ReaderOptions(modules=["tests.dummies"]).modules == ("tests.dummies",)
