"""Boundary adapters: relational store and external HTTP services."""
