"""Tile-based platformer: a level map, a small entity store and the player systems."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import AbstractSet, Any, Generic, Iterator, Sequence, TypeVar

from skyharbor.flight import Key
from skyharbor.geometry import Rectangle, Vector2

MAX_ENTITIES = 1000
WIDTH = 1024
HEIGHT = 512
MAX_LEVEL_COLUMNS = 48
GRAVITY = 2.0
JUMP_TIME = 0.05
TILE_SIZE = 32.0
FLOOR_HEIGHT = 8.0
HORIZONTAL_ACCELERATION = 20.0

TITLE = "ROBOT RUN"
START_TEXT = "START"
START_BUTTON = Rectangle(WIDTH // 2 - 64, HEIGHT // 2 - 32 + 100, 128, 32)
TEXTURE_FILES = ("Player.png", "Enemy.png", "Wallt.png", "Plank.png", "Entrance.png", "Exit.png")

LEVEL_MAP = (
    "W.........................W....W...............W"
    "W.........................W....W...............W"
    "W...................FFFFFFW....W...............W"
    "W.........FFFF.................W...............E"
    "W...............................FFFFFFFFFFFFFFFW"
    "W....................FFFFFFFF..................W"
    "W.............OOO.................FFFFFFF......W"
    "W........FFFFFFFF..............................W"
    "W..........................................FFFFW"
    "WFF.................FFFFFFF....................W"
    "W......OO......................OOO.............W"
    "WFFFFFFFFFFFFFF................FFFFFFFFFFFF....W"
    "W.....................OO.......................W"
    "W.S.................FFFFFFFFFFFFFFF............W"
    "D..P...........................................W"
    "FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFF"
)

T = TypeVar("T")


class TileType(IntEnum):
    NONE = 0
    FLOOR = 1
    WALL = 2
    ENEMY = 3
    PLAYER = 4
    DOOR = 5
    EXIT = 6
    SPAWN = 7


@dataclass
class Position:
    position: Vector2 = Vector2()


@dataclass
class Tile:
    kind: TileType = TileType.NONE
    texture: Any = None
    color: tuple[int, int, int, int] = (255, 255, 255, 255)


@dataclass
class CollisionBox:
    rect: Rectangle = Rectangle()


@dataclass
class Physics:
    velocity: Vector2 = Vector2()
    jump_speed: float = 0.0
    max_speed: float = 0.0


@dataclass
class State:
    is_grounded: bool = False
    is_jumping: bool = False
    move_direction: int = 0


class TypeRegistry:
    """Gives every component type a stable index, in order of first use."""

    def __init__(self) -> None:
        self._ids: dict[type, int] = {}

    def type_id(self, component_type: type) -> int:
        return self._ids.setdefault(component_type, len(self._ids))


_registry = TypeRegistry()


class ComponentStorage(Generic[T]):
    """Components of one type, stored densely by entity index."""

    def __init__(self, component_type: type[T] | None = None) -> None:
        self.component_type = component_type
        self._data: list[T] = []

    def __len__(self) -> int:
        return len(self._data)

    def get(self, entity: int) -> T:
        if not 0 <= entity < len(self._data):
            raise IndexError(f"no component stored for entity {entity}")
        return self._data[entity]

    def allocate(self, amount: int) -> None:
        """Append default components."""
        if self.component_type is None:
            raise TypeError("storage has no component type")
        if amount < 0 or len(self._data) + amount > MAX_ENTITIES:
            raise OverflowError(f"a storage holds at most {MAX_ENTITIES} components")
        self._data.extend(self.component_type() for _ in range(amount))

    def get_or_allocate(self, entity: int) -> T:
        """The entity's component, growing the storage to reach it if needed."""
        if not 0 <= entity < MAX_ENTITIES:
            raise IndexError(f"invalid entity {entity}")
        size = len(self._data)
        if size <= entity:
            self.allocate(max(entity - size + 1, 1))
        return self.get(entity)


class SceneManager:
    """Entities as sets of component ids, with one storage per component type."""

    def __init__(self, registry: TypeRegistry | None = None) -> None:
        self.registry = registry if registry is not None else _registry
        self.entity_masks: list[set[int]] = []
        self.components: list[ComponentStorage] = []

    def __len__(self) -> int:
        return len(self.entity_masks)

    def _mask(self, entity: int) -> set[int]:
        if not 0 <= entity < len(self.entity_masks):
            raise IndexError(f"no such entity: {entity}")
        return self.entity_masks[entity]

    def create_entity(self) -> int:
        if len(self.entity_masks) >= MAX_ENTITIES:
            raise OverflowError(f"a scene holds at most {MAX_ENTITIES} entities")
        self.entity_masks.append(set())
        return len(self.entity_masks) - 1

    def add_component(self, entity: int, component_type: type[T]) -> T:
        mask = self._mask(entity)
        cid = self.registry.type_id(component_type)
        if cid >= len(self.components):
            self.components.extend(
                ComponentStorage() for _ in range(cid - len(self.components) + 1)
            )
        if self.components[cid].component_type is None:
            self.components[cid] = ComponentStorage(component_type)
        mask.add(cid)
        return self.components[cid].get_or_allocate(entity)

    def get_component(self, entity: int, component_type: type[T]) -> T:
        if not self.has_component(entity, component_type):
            raise KeyError(f"entity {entity} has no {component_type.__name__}")
        return self.components[self.registry.type_id(component_type)].get(entity)

    def has_component(self, entity: int, component_type: type) -> bool:
        return self.registry.type_id(component_type) in self._mask(entity)


_TILE_KINDS = {
    "W": (TileType.WALL, 2),
    "F": (TileType.FLOOR, 3),
    "O": (TileType.ENEMY, 1),
    "D": (TileType.DOOR, 4),
    "P": (TileType.PLAYER, 0),
    "E": (TileType.EXIT, 5),
    "S": (TileType.SPAWN, None),
}


def setup_scene(scene: SceneManager, level_map: str,
                textures: Sequence[Any]) -> tuple[int, int]:
    """Create a tile entity for every non-empty cell; returns (player, spawn)."""
    if len(textures) < len(TEXTURE_FILES):
        raise ValueError(f"expected {len(TEXTURE_FILES)} textures, got {len(textures)}")
    player: int | None = None
    spawn: int | None = None
    for index, char in enumerate(level_map):
        if char == ".":
            continue
        row, column = divmod(index, MAX_LEVEL_COLUMNS)
        corner = Vector2(column * TILE_SIZE, row * TILE_SIZE)
        entity = scene.create_entity()
        scene.add_component(entity, Position).position = corner
        tile = scene.add_component(entity, Tile)
        cbox = scene.add_component(entity, CollisionBox)
        cbox.rect = Rectangle(corner.x, corner.y, TILE_SIZE, TILE_SIZE)
        kind, texture_index = _TILE_KINDS.get(char, (TileType.NONE, None))
        tile.kind = kind
        tile.texture = None if texture_index is None else textures[texture_index]
        if kind is TileType.FLOOR:
            cbox.rect = Rectangle(corner.x, corner.y, TILE_SIZE, FLOOR_HEIGHT)
        elif kind is TileType.PLAYER:
            player = entity
        elif kind is TileType.SPAWN:
            spawn = entity
    if player is None:
        raise ValueError("the level has no player tile")
    if spawn is None:
        raise ValueError("the level has no spawn tile")
    return player, spawn


def move_system(held: AbstractSet[Key], state: State) -> None:
    """Read the held keys: A and D walk, SPACE jumps from the ground."""
    state.move_direction = int(Key.D in held) - int(Key.A in held)
    if Key.SPACE in held and state.is_grounded:
        state.is_jumping = True
        state.is_grounded = False


def physics_system(phys: Physics, pos: Position, cbox: CollisionBox, state: State,
                   jump_timer: float, dt: float) -> float:
    """Advance the player one frame; returns the updated jump timer."""
    vx, vy = phys.velocity
    if state.move_direction == 0:
        vx = 0.0
    vx += state.move_direction * HORIZONTAL_ACCELERATION * dt
    vx = max(-phys.max_speed, min(phys.max_speed, vx))

    if state.is_jumping and jump_timer > 0:
        vy -= phys.jump_speed * HORIZONTAL_ACCELERATION * dt
        jump_timer -= dt
    elif jump_timer <= 0:
        jump_timer = JUMP_TIME
        state.is_jumping = False

    if not state.is_grounded and not state.is_jumping:
        vy += GRAVITY * dt

    phys.velocity = Vector2(vx, vy)
    pos.position = pos.position + phys.velocity
    cbox.rect = cbox.rect.moved_to(pos.position)
    return jump_timer


def collision_system(scene: SceneManager, player: int, spawn: int, player_pos: Position,
                     player_cbox: CollisionBox, player_state: State,
                     player_phys: Physics) -> None:
    """Push the player out of every tile it overlaps; enemies send it back to spawn."""
    did_collide = False
    spawn_pos = scene.get_component(spawn, Position)
    for entity in range(len(scene)):
        if entity == player:
            continue
        if not (scene.has_component(entity, CollisionBox)
                and scene.has_component(entity, Tile)
                and scene.has_component(entity, Position)):
            continue
        rect = scene.get_component(entity, CollisionBox).rect
        if not player_cbox.rect.check_collision(rect):
            continue
        did_collide = True
        tile = scene.get_component(entity, Tile)
        pos = scene.get_component(entity, Position)
        overlap = player_cbox.rect.collision_rect(rect)
        diff = player_pos.position - pos.position
        px, py = player_pos.position
        vx, vy = player_phys.velocity
        if overlap.width < overlap.height:
            px += overlap.width if diff.x > 0 else -overlap.width
            vx = 0.0
        else:
            if diff.y > 0:
                py += overlap.height
                player_state.is_jumping = False
            else:
                py -= overlap.height
                player_state.is_grounded = True
            vy = 0.0
        player_pos.position = Vector2(px, py)
        player_phys.velocity = Vector2(vx, vy)
        if tile.kind is TileType.ENEMY:
            player_pos.position = spawn_pos.position
    if not did_collide:
        player_state.is_grounded = False


def camera_system(player_pos: Position,
                  screen: Rectangle) -> tuple[Vector2, Vector2, Rectangle]:
    """Camera target and offset that follow the player, and the visible area."""
    target = Vector2(float(int(player_pos.position.x)), float(int(player_pos.position.y)))
    offset = Vector2(WIDTH // 2, HEIGHT / 1.5)
    return target, offset, screen.moved_to(player_pos.position - offset)


def visible_tiles(scene: SceneManager,
                  screen: Rectangle) -> Iterator[tuple[Any, Rectangle, Vector2]]:
    """Texture, source rectangle and position of every textured tile on screen."""
    for entity in range(len(scene)):
        if not (scene.has_component(entity, Position)
                and scene.has_component(entity, Tile)
                and scene.has_component(entity, CollisionBox)):
            continue
        rect = scene.get_component(entity, CollisionBox).rect
        if not rect.check_collision(screen):
            continue
        tile = scene.get_component(entity, Tile)
        if tile.texture is None:
            continue
        yield tile.texture, rect, scene.get_component(entity, Position).position