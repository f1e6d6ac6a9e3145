"""Application layer: orchestration services over the core and boundary layers."""
