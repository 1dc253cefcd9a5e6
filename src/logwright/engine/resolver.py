# src/logwright/engine/resolver.py
"""Selection of the configuration method that answers a directive.

Candidates are filtered to the directive name, then to the ones whose every
parameter is either supplied, defaulted, or filled implicitly. Among those
the candidate binding the most supplied arguments wins; ties prefer the one
with more str parameters (a literal beats a constructed object), then the
one registered first.
"""

from collections.abc import Collection, Sequence

from logwright.contracts.enums import Capability
from logwright.contracts.methods import CandidateMethod, ParameterSpec
from logwright.core.configuration import ConfigurationRoot
from logwright.core.logging import get_logger
from logwright.engine.type_helpers import unwrap_optional

logger = get_logger(__name__)


def is_implicitly_populated(parameter: ParameterSpec) -> bool:
    """Parameters typed ConfigurationRoot receive the application configuration."""
    return unwrap_optional(parameter.annotation)[0] is ConfigurationRoot


def has_implicit_value(parameter: ParameterSpec) -> bool:
    return parameter.has_default or is_implicitly_populated(parameter)


def _rank(candidate: CandidateMethod, supplied: Collection[str]) -> tuple[int, int, int]:
    matched = [p for p in candidate.parameters if p.name in supplied]
    string_matched = sum(1 for p in matched if unwrap_optional(p.annotation)[0] is str)
    # min() picks the best, so larger counts sort first
    return -len(matched), -string_matched, candidate.order


def select_configuration_method(
    candidates: Sequence[CandidateMethod],
    name: str,
    supplied_argument_names: Collection[str],
    capability: Capability | None = None,
) -> CandidateMethod | None:
    """Pick the best candidate for a directive, or None when nothing fits.

    A None result means the directive is skipped. The skip is not an error
    but is reported as a warning listing what was available.
    """
    supplied = set(supplied_argument_names)
    named = [
        c for c in candidates if c.name == name and (capability is None or c.capability == capability)
    ]
    eligible = [c for c in named if all(has_implicit_value(p) or p.name in supplied for p in c.parameters)]

    if eligible:
        return min(eligible, key=lambda c: _rank(c, supplied))

    if named:
        logger.warning(
            "No configuration method matches the supplied arguments, skipping directive",
            method=name,
            supplied_arguments=sorted(supplied),
            candidates=[c.describe() for c in named],
        )
    elif candidates:
        logger.warning(
            "No configuration method with this name, skipping directive",
            method=name,
            candidates=sorted({c.describe() for c in candidates}),
        )
    else:
        logger.warning("No configuration method with this name and no candidates found, skipping directive", method=name)
    return None
