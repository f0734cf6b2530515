# tests/__init__.py

"""
Testing Package for Hoeffding Decision Tree
"""

# This file makes the `tests` directory a Python package so test modules can
# import the stream generators from `tests.generated_datasets`.
