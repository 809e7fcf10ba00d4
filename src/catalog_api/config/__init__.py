"""
Configuration management for the Catalog API.

Contains the Pydantic settings shared by the HTTP app, the record stores and the CLI.
"""
