# tests/engine/test_resolver.py
"""Tests for choosing the configuration method that answers a directive."""

from typing import Any

from structlog.testing import capture_logs


def _candidate(name: str, *parameters: tuple[str, Any, bool], order: int = 0):
    from logwright.contracts.enums import Capability
    from logwright.contracts.methods import CandidateMethod, ParameterSpec

    return CandidateMethod(
        name=name,
        capability=Capability.SINK,
        parameters=tuple(ParameterSpec(n, a, has_default=d) for n, a, d in parameters),
        function=lambda receiver, **kwargs: None,
        order=order,
    )


class TestSelectConfigurationMethod:
    def test_name_must_match_exactly(self) -> None:
        from logwright.engine.resolver import select_configuration_method

        candidates = [_candidate("console")]

        assert select_configuration_method(candidates, "console", []) is candidates[0]
        assert select_configuration_method(candidates, "Console", []) is None

    def test_required_parameters_must_be_supplied(self) -> None:
        from logwright.engine.resolver import select_configuration_method

        candidates = [_candidate("file", ("path", str, False))]

        assert select_configuration_method(candidates, "file", []) is None
        assert select_configuration_method(candidates, "file", ["path"]) is candidates[0]

    def test_argument_names_are_case_sensitive(self) -> None:
        from logwright.engine.resolver import select_configuration_method

        candidates = [_candidate("file", ("path", str, False))]

        assert select_configuration_method(candidates, "file", ["Path"]) is None

    def test_most_bound_arguments_wins(self) -> None:
        from logwright.engine.resolver import select_configuration_method

        short = _candidate("file", ("path", str, False), order=0)
        long = _candidate("file", ("path", str, False), ("buffered", bool, True), order=1)

        assert select_configuration_method([short, long], "file", ["path", "buffered"]) is long
        assert select_configuration_method([short, long], "file", ["path"]) is short

    def test_string_parameters_win_ties(self) -> None:
        from pathlib import Path

        from logwright.engine.resolver import select_configuration_method

        as_path = _candidate("file", ("target", Path, False), order=0)
        as_str = _candidate("file", ("target", str | None, False), order=1)

        assert select_configuration_method([as_path, as_str], "file", ["target"]) is as_str

    def test_registration_order_breaks_remaining_ties(self) -> None:
        from logwright.engine.resolver import select_configuration_method

        first = _candidate("file", ("path", str, False), order=0)
        second = _candidate("file", ("path", str, False), order=1)

        assert select_configuration_method([second, first], "file", ["path"]) is first

    def test_unmatched_supplied_arguments_are_ignored(self) -> None:
        from logwright.engine.resolver import select_configuration_method

        candidates = [_candidate("console")]

        assert select_configuration_method(candidates, "console", ["unknown"]) is candidates[0]

    def test_configuration_root_parameter_is_implicit(self) -> None:
        from logwright.core.configuration import ConfigurationRoot
        from logwright.engine.resolver import select_configuration_method

        candidates = [_candidate("file", ("configuration", ConfigurationRoot, False))]

        assert select_configuration_method(candidates, "file", []) is candidates[0]

    def test_capability_filter(self) -> None:
        from logwright.contracts.enums import Capability
        from logwright.engine.resolver import select_configuration_method

        candidates = [_candidate("console")]

        assert select_configuration_method(candidates, "console", [], Capability.FILTER) is None


class TestSkipDiagnostics:
    def test_arguments_mismatch_is_reported(self) -> None:
        from logwright.engine.resolver import select_configuration_method

        with capture_logs() as logs:
            select_configuration_method([_candidate("file", ("path", str, False))], "file", ["name"])

        (entry,) = logs
        assert entry["log_level"] == "warning"
        assert entry["method"] == "file"
        assert entry["supplied_arguments"] == ["name"]
        assert entry["candidates"] == ["file(path)"]

    def test_unknown_name_is_reported(self) -> None:
        from logwright.engine.resolver import select_configuration_method

        with capture_logs() as logs:
            select_configuration_method([_candidate("console")], "consol", [])

        assert logs[0]["event"] == "No configuration method with this name, skipping directive"
        assert logs[0]["candidates"] == ["console()"]

    def test_no_candidates_is_reported(self) -> None:
        from logwright.engine.resolver import select_configuration_method

        with capture_logs() as logs:
            select_configuration_method([], "console", [])

        assert logs[0]["method"] == "console"


class TestImplicitParameters:
    def test_optional_configuration_root_is_implicit(self) -> None:
        from logwright.contracts.methods import ParameterSpec
        from logwright.core.configuration import ConfigurationRoot
        from logwright.engine.resolver import has_implicit_value, is_implicitly_populated

        parameter = ParameterSpec("configuration", ConfigurationRoot | None, has_default=True)

        assert is_implicitly_populated(parameter)
        assert has_implicit_value(parameter)
        assert not is_implicitly_populated(ParameterSpec("path", str))
