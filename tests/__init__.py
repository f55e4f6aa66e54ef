"""Unit tests for codeconvert.

This package contains test modules for all components of the codeconvert application.
Tests use pytest with asyncio support and mock HTTP/network calls via AsyncMock and monkeypatch.
"""
