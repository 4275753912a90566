"""Pydantic models for Shopify Admin API payloads."""
