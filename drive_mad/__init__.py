from drive_mad.controller import GameController, GamePhase, Readout
from drive_mad.entities import Obstacle, Pickup, Player, PlayingField
from drive_mad.frames import ManualFrameSource, PygameFrameSource
from drive_mad.input_state import InputState, SteeringInput
from drive_mad.persistence import JsonHighScoreStore, MemoryHighScoreStore
from drive_mad.simulation import SimulationState, StepResult, rects_overlap, step
from drive_mad.spawner import NullSpawner, Spawner, spawn_cadence

__version__ = "0.1.0"

__all__ = [
    "GameController",
    "GamePhase",
    "InputState",
    "JsonHighScoreStore",
    "ManualFrameSource",
    "MemoryHighScoreStore",
    "NullSpawner",
    "Obstacle",
    "Pickup",
    "Player",
    "PlayingField",
    "PygameFrameSource",
    "Readout",
    "SimulationState",
    "Spawner",
    "SteeringInput",
    "StepResult",
    "rects_overlap",
    "spawn_cadence",
    "step",
]
