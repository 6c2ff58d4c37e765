"""
Test Suite for Portal Data-View.

Test organization:
    - unit/: Unit tests for individual stages and adapters
    - integration/: ViewPipeline and compose() end to end
    - performance/: Timing benchmarks (marked "performance")
    - fixtures/: Static collections and sample configuration

Running Tests:
    pytest tests/                           # All tests
    pytest tests/unit/                      # Unit tests only
    pytest -m "not performance"             # Skip benchmarks
"""
