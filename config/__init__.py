"""Konfiguration: Schema, Defaults und Laden/Speichern."""
