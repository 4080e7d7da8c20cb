# towerdefense

A tower defense game played on a randomly generated 10 x 8 grid. Enemies
walk a winding path from the left edge to the right edge. Build towers on the
grass tiles next to the path to stop them before they get through.

## Installing

```
pip install .
```

## Playing

```
towerdefense --assets path/to/assets
```

`--assets` names the directory that holds the font and the sound effects. It
defaults to `assets` in the current directory. The directory must contain:

- `fonts/BRLNSR.TTF`
- `sounds/` with `bullet-shoot.wav`, `splash-shoot.wav`,
  `splash-explosion.wav`, `slow-pulse.wav`, `life-lost.wav`, `new-wave.wav`,
  `enemy-hit.wav`, `enemy-death.wav`, `tower-upgrade.wav` and
  `button-click.wav`

If any of these files is missing, the game stops with `FileNotFoundError`.

The game opens on the main menu. Press **Enter** to start and **Escape** to
quit. You can also close the window to quit.

- **Right click** a grass tile to open the build menu and choose a tower. You
  can only buy towers you have enough gold for.
- **Right click** a tower to see its stats and to upgrade or sell it. Hover
  over the upgrade button to preview the next level's stats.
- **Left click** anywhere outside an open menu to close it.

You start with 5 lives and 100 gold. Each enemy that reaches the end costs a
life, and each enemy destroyed pays gold. The first wave begins after a
ten-second pause, and every later wave begins ten seconds after the previous
one has finished spawning. Each wave brings one more enemy than the last.
Enemies also move slightly faster with every wave and gain health every few
waves.

When the last life is lost, the game shows the wave you reached. Press
**Enter** to return to the main menu. Starting again generates a new level.

### Towers

| Tower  | Cost | Role                                                      |
|--------|------|-----------------------------------------------------------|
| Bullet | 20g  | Fast single-target shots aimed ahead of the enemy         |
| Splash | 30g  | Slow shells that explode and damage everything nearby     |
| Slow   | 25g  | Pulses that slow every enemy within range for a while     |

Each tower can be upgraded twice. Upgrades raise damage, range and rate of
fire, and also splash radius or the strength and length of the slow. A sold
tower returns part of its price. The full table is in
`towerdefense.tower_registry.tower_metadata_registry()`.

## Starting from code

```python
from towerdefense.game import Game

Game("path/to/assets").run()
```

`Game()` without an asset directory uses pygame's default font and loads no
sounds. Requests to play a sound are then logged as errors and otherwise
ignored. `Game.update()` and `Game.render()` can be driven step by step
without opening a window; drawing then goes to an off-screen surface.

## What it does not do

The game keeps no saved games, high scores or settings between runs. Volume,
window size and level size cannot be set from the command line.

## Development

```
pip install .[test]
pytest
```