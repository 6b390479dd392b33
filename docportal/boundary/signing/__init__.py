"""Digital signature API boundary."""

from docportal.boundary.signing.client import SigningClient, build_signature_data

__all__ = ["SigningClient", "build_signature_data"]
