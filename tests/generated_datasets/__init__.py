# tests/generated_datasets/__init__.py

"""
Generated Datasets Sub-Package for Hoeffding Decision Tree Tests
"""
