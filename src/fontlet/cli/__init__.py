"""Command-line interface and the interactive picker."""
