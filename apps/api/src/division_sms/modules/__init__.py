"""
Feature modules.

Each module follows the same layering: router -> service -> repository -> models.
"""
