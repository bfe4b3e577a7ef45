"""
Nonogram Engine - Configuration Package
Tunables for puzzle generation, file format and history.
"""
from .engine_config import EngineConfig

__all__ = ['EngineConfig']
