"""
Property-based testing using Hypothesis.

This package contains property tests that verify mathematical invariants
hold across randomly generated inputs.

Modules:
    test_path_properties: buffer cadence, bridge orthogonality, antithetic
        pairs, average-price bounds
"""
