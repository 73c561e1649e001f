"""Feature modules: domain models, repository protocols and services."""
