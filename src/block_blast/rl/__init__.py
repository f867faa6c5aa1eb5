"""Agents and training scripts for the Block Blast environment."""
