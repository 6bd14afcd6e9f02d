# skyharbor

The game logic for a handful of small 2D and 3D games. Each module keeps its
state in plain Python objects and advances it one frame at a time. You can
drive it from any front end, or from tests.

## Modules

| Module | What it models |
| --- | --- |
| `skyharbor.geometry` | `Vector2`, `Vector3`, `Quaternion`, `Rectangle` and `BoundingBox`. Covers vector arithmetic, `normalize`, `Quaternion.from_euler` / `to_axis_angle`, rectangle overlap (`check_collision`, `collision_rect`, `contains_point`) and box overlap. |
| `skyharbor.colorfade` | `ColorFader` steps red, then green, then blue up to 255 and back down in the same order. `centered_text_x` gives the left edge that centres a line of text. |
| `skyharbor.flight` | `Plane` has per-press acceleration, toggled left/right turning, vertical speed, a speed cap and ground clamping. `Fleet` moves the selection on with TAB. Also holds the helpers `forward_vector`, `exceeds_max_forward_velocity`, `move_camera` and `format_vector`, and the `Key` enum used across the package. |
| `skyharbor.flappy` | `FlappyPlane` climbs while space is held and falls otherwise. Holding space starts the run. Setting `reset` sends the plane back to the start. Also holds `pillar_boxes`, `speed_increment` and `format_score`. |
| `skyharbor.volume` | `VolumeControlState` holds the `sfx`, `music` and `dialogue` sliders. `set_slider` clamps to 0–100 and raises `ValueError` for an unknown slider. `labels` gives the percentage text for each group. |
| `skyharbor.components` | An object-oriented entity/component model: `Entity`, `TransformComponent`, `PhysicsComponent`, `InputComponent` with an `ActionMap`, and `RenderComponent`. The `Vehicle`, `Plane` and `Boat` classes build on it. `build_fleet` and `cycle_selection` manage a fleet of five boats and five planes. |
| `skyharbor.ecs` | A data-oriented `Scene` with one `ComponentStorage` per component type. Provides the components `Physics2D`, `Physics3D`, `TransformState`, `Render` and `Inputs`, and the systems `boat_system`, `plane_system`, `physics_2d_system`, `physics_3d_system` and `camera_system`. `populate_scene` adds the standard ten vehicles. |
| `skyharbor.platformer` | A tile-map platformer: `SceneManager`, `TypeRegistry`, `setup_scene` for reading a level map such as `LEVEL_MAP`, and the systems `move_system`, `physics_system`, `collision_system`, `camera_system` and `visible_tiles`. |

## Frames, time and input

Every update takes the frame time `dt` in seconds. You pass keyboard state in
as plain values; the package never reads a device itself.

- `flight.Plane.update` and `flight.Fleet.update` take the set of `Key`s pressed this frame.
- `FlappyPlane.update` takes whether space is held.
- In `skyharbor.components`, assign the keys pressed this frame to an `InputComponent`'s `pressed` attribute. The component runs the callbacks it has bound only while its entity is selected. Use `Entity.select()` and `Entity.deselect()` to change that.
- `ecs.boat_system` and `ecs.plane_system` take a set of held `Action`s and the current input latch, and return the new latch. `KEY_ACTIONS` maps keys to actions.
- `platformer.move_system` takes the set of held `Key`s: A and D walk, and SPACE jumps from the ground.

## Example

```python
from skyharbor.colorfade import ColorFader, centered_text_x
from skyharbor.flight import Fleet, Key

fader = ColorFader()
for _ in range(300):
    fader.step()
print(fader.color())                 # (255, 45, 0, 255)

print(centered_text_x(960, 200))     # 380

fleet = Fleet.of(["Plane 01", "Plane 02", "Plane 03"])
fleet.update({Key.W}, 1 / 60)        # the selected plane speeds up
fleet.update({Key.TAB}, 1 / 60)      # the selection moves to "Plane 02"
print(fleet.current().name)
```

```python
from skyharbor.platformer import (
    LEVEL_MAP, CollisionBox, Physics, Position, SceneManager, State, setup_scene,
)

scene = SceneManager()
player, spawn = setup_scene(scene, LEVEL_MAP, textures=["tex"] * 6)
phys = scene.add_component(player, Physics)
state = scene.add_component(player, State)
pos = scene.get_component(player, Position)
cbox = scene.get_component(player, CollisionBox)
```

## What this package does not do

It has no window, renderer, sound or input device, and it installs no command.
Drawing is left to the caller. `RenderComponent` passes each entity's pose to a
draw function that you supply. `visible_tiles` yields the tiles that fall on
screen, and the `camera_system` functions return camera positions and targets
rather than moving a camera.

## Running the tests

Install the package with its `test` extra, then run `pytest` from the project root.