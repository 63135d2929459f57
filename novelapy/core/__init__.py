"""Core building blocks of novelapy."""
