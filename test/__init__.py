"""Test suite for the CIFTree package.

Covers the cursor and value grammar, the recursive-descent parser
and its error reporting, the tree structures, the flat (tabular) output,
and reading documents from disk.

Run tests with pytest:
    pytest                   # Run all tests
    pytest -m parser         # Run only parser tests
    pytest -m "not slow"     # Skip large documents
    pytest --cov=ciftree     # Run with coverage
"""
