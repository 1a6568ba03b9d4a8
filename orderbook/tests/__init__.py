"""Tests for the orderbook package."""
