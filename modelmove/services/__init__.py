"""
Services module for modelmove.

This module provides low-level utilities and interfaces with external systems
such as the Azure CLI, child processes, and settings files.
"""
