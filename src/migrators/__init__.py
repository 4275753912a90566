"""
Shopify API migrators and helpers.

This subpackage provides functions to interact with the Shopify Admin REST
API for listing themes and their assets and for copying a single asset from
one store to another.  It encapsulates rate limiting, header injection and
the local staging of downloaded files.
"""
