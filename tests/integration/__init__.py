"""
Integration Tests - End-to-End Pipeline Tests.

These tests verify that stages, adapters, configuration and export work
together over the static fixture collections.

Test Files:
    - test_view_pipeline.py: ViewPipeline and compose() workflows
"""
