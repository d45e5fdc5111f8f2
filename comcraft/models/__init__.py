"""Typed records shared by the catalog, pricing, order and permission layers."""
