"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    WAITING = "waiting"
    PLAYING = "playing"
    FINISHED = "finished"


class CardType(StrEnum):
    BONE = "bone"
    BOWL = "bowl"
    DOGHOUSE = "doghouse"


class BoneColor(StrEnum):
    """The palette. Order matters: it is the bowl order at setup and the fallback order for decoy colors."""

    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    PURPLE = "purple"


# Sentinel a client sends instead of a bone id to leave a dug bone where it was.
PUT_BACK = "PUT_BACK"
