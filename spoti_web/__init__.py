"""Spotify playback and party-queue backend."""
