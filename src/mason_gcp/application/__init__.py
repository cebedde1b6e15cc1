"""Application layer - provisioning services."""
