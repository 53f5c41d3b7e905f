"""Unit tests package for GKE Credentials MCP.

Fast, fully-mocked tests for configuration and the MCP server surface.
"""
