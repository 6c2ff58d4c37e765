"""
Unit Tests - Testing Individual Components in Isolation.

Unit tests should be fast, deterministic, and focused. Debounce timing is
driven by ManualScheduler rather than real timers wherever possible.

Test Files:
    - test_search_stage.py: Search function and stage
    - test_category_filter.py: Category and multi-select filters
    - test_pagination.py: Page windows and clamping
    - test_debounce.py: Debouncer, DebouncedValue, schedulers
    - test_config_loader.py: Configuration loading/validation
"""
