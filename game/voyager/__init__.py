"""Cosmic Voyager - arcade space shooter simulation"""

from .simulation import Simulation, Snapshot
from .voyager_env import VoyagerEnv, run_random_episode

__all__ = ['Simulation', 'Snapshot', 'VoyagerEnv', 'run_random_episode']
