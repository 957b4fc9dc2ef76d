"""Application services: table access, page state and cross-table workflows."""
