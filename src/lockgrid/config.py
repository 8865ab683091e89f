from dataclasses import dataclass, field

LEVEL_SIZE = 22
SPRITE_SIZE = 32  # pixels per tile in exported images

# Every rejection-sampling loop gives up after this many draws.
MAX_PLACEMENT_ATTEMPTS = 4096

@dataclass(frozen=True)
class DiggerParams:
    agents: int = 5
    turn_chance_step: float = 0.01
    walkable_portion: float = 0.2

    @classmethod
    def from_weights(cls, turn: float = 0.5, walkable: float = 0.5) -> "DiggerParams":
        # Weights in [0, 1]; 0.5 reproduces the defaults.
        base = cls()
        return cls(
            agents=base.agents,
            turn_chance_step=base.turn_chance_step * 2 * turn,
            walkable_portion=base.walkable_portion * 2 * walkable,
        )

@dataclass(frozen=True)
class RoomParams:
    count: int = 8
    min_width: int = 2
    max_width: int = 6
    min_height: int = 2
    max_height: int = 6

@dataclass(frozen=True)
class ScatterParams:
    gold_chance: float = 0.07
    enemy_chance: float = 0.03
    spikes_chance: float = 0.03

    @classmethod
    def from_weights(cls, gold: float, enemy: float, spikes: float) -> "ScatterParams":
        # The verified placer takes its weights as the chances themselves.
        return cls(gold_chance=gold, enemy_chance=enemy, spikes_chance=spikes)

@dataclass(frozen=True)
class WallParams:
    portion: float = 4.0   # wall additions as a multiple of the tile count
    attempts: int = 32     # tries per wall before moving on

@dataclass(frozen=True)
class GenConfig:
    digger: DiggerParams = field(default_factory=DiggerParams)
    rooms: RoomParams = field(default_factory=RoomParams)
    scatter: ScatterParams = field(default_factory=ScatterParams)
    walls: WallParams = field(default_factory=WallParams)
    floor_portion: float = 0.5
    max_placement_attempts: int = MAX_PLACEMENT_ATTEMPTS

# Shared defaults (callers may build their own GenConfig)
DEFAULT_CONFIG = GenConfig()
