"""
Minehunt agents module.

Provides automated players for Minehunt sessions:
- RandomAgent: Baseline random selection
- LogicAgent: Count-based mine deduction
"""
from .base_agent import BaseAgent
from .random_agent import RandomAgent
from .logic_agent import LogicAgent, Deduction

__all__ = [
    "BaseAgent",
    "RandomAgent",
    "LogicAgent",
    "Deduction",
]
