"""Shared protocol constants between runtime, server, and web UI."""
