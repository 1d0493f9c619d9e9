from .payload_parser import build_source_map, load_payload, load_payload_from_string, load_payload_with_source

__all__ = ["build_source_map", "load_payload", "load_payload_from_string", "load_payload_with_source"]
