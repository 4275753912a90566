"""
Top-level package for the Shopify theme asset migration utility.

This package bundles all components required to copy the static assets of
one store's live theme into a named theme of another store.  Modules are
split into subpackages:

* :mod:`src.migrators` – Shopify API interactions and per-asset transfer
* :mod:`src.utils` – configuration, result type, logging and reports

Each layer has no direct knowledge of the environment or execution
strategy; orchestration is handled in the migration_tool.
"""
