"""Riddler: a riddle game against an AI Guardian."""
