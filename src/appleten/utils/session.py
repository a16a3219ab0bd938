"""Lookups for the singleton components that make up a play session."""
from __future__ import annotations

from typing import Type, TypeVar

from esper import World

from appleten.components.board import Board
from appleten.components.countdown import Countdown
from appleten.components.drag_selection import DragSelection
from appleten.components.lives import Lives
from appleten.components.score import Score
from appleten.config import DifficultyConfig

T = TypeVar("T")


def get_singleton(world: World, component_type: Type[T]) -> T | None:
    for _, component in world.get_component(component_type):
        return component
    return None


def get_board(world: World) -> Board | None:
    return get_singleton(world, Board)


def get_countdown(world: World) -> Countdown | None:
    return get_singleton(world, Countdown)


def get_score(world: World) -> Score | None:
    return get_singleton(world, Score)


def get_lives(world: World) -> Lives | None:
    return get_singleton(world, Lives)


def get_selection(world: World) -> DragSelection | None:
    return get_singleton(world, DragSelection)


def get_config(world: World) -> DifficultyConfig:
    config = getattr(world, "config", None)
    return config if isinstance(config, DifficultyConfig) else DifficultyConfig()
