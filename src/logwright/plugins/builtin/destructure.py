# src/logwright/plugins/builtin/destructure.py
"""Built-in Destructure configuration methods."""

from logwright.pipeline.configuration import LoggerConfiguration, LoggerDestructuringConfiguration
from logwright.plugins.protocols import DestructuringPolicy


def with_policy(destructure: LoggerDestructuringConfiguration, policy: DestructuringPolicy) -> LoggerConfiguration:
    return destructure.with_policies(policy)


def to_maximum_depth(destructure: LoggerDestructuringConfiguration, maximum_destructuring_depth: int) -> LoggerConfiguration:
    return destructure.to_maximum_depth(maximum_destructuring_depth)


def to_maximum_string_length(destructure: LoggerDestructuringConfiguration, maximum_string_length: int) -> LoggerConfiguration:
    return destructure.to_maximum_string_length(maximum_string_length)


def to_maximum_collection_count(
    destructure: LoggerDestructuringConfiguration, maximum_collection_count: int
) -> LoggerConfiguration:
    return destructure.to_maximum_collection_count(maximum_collection_count)


def as_scalar(destructure: LoggerDestructuringConfiguration, scalar_type: type) -> LoggerConfiguration:
    """Log values of scalar_type as-is instead of destructuring them."""
    return destructure.as_scalar(scalar_type)
