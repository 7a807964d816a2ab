"""Application Layer.

Infrastructure and application services that orchestrate domain logic.
This layer handles configuration, logging setup and the adapters behind the
domain ports.
"""
