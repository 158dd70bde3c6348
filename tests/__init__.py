"""Tests for Expenso."""
