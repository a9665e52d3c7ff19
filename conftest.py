"""
Root conftest.py for pytest configuration.

Its presence puts the project root on sys.path, so test modules can import
shared models and helpers as `tests.structstest` and `tests.helpers`.
"""
