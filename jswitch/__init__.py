"""Find, switch between, and download JDK installations."""

__version__ = "0.1.0"