"""
Command-line tools for integration app development.

- Conformance checking of app directories
- Listing the tools an app declares
"""
