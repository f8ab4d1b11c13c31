"""Helpers for the port discoverer."""

from .port_parser import is_listening_line, parse_listening_ports, parse_port

__all__ = ["is_listening_line", "parse_listening_ports", "parse_port"]
