"""Loading of analysis payloads."""

from .loader import load_file, load_payload, parse_payload

__all__ = ["load_file", "load_payload", "parse_payload"]
