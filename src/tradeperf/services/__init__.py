"""Adapters around the analytics core: trade loading and reporting."""
