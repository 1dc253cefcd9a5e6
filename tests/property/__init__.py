# tests/property/__init__.py
"""Property-based tests for logwright.

Property-based testing validates invariants that must hold for ALL inputs,
not just the specific examples we think of. Configuration documents come from
files and environment variables we do not control, so the reader has to
behave the same way for every well-formed shape.

Test categories:
- test_configuration_properties: flattening, layering and key lookup
- test_directive_properties: directive order, level parsing, switch names
"""
