"""Unit tests for the Open JTalk speech backend.

This package contains test modules for all components of the backend.
Tests use pytest; the open_jtalk process and the audio device are replaced via monkeypatch.
"""
