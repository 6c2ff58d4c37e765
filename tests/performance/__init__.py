"""
Performance Tests.

Benchmarks for the view pipeline over generated collections:
    - 10,000 records < 2 seconds
    - 50,000 records < 5 seconds
"""
