"""Application layer: service orchestration and stream relaying."""
